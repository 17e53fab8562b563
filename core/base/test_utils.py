from django.core.management import call_command
from core.roles.core_config import CoreRoles
from core.roles.models import Role
import io

def setup_core_data():
    """Initialize core system data for tests once and suppressing print output"""
    # Check if already setup in this transaction to minimize calls
    if Role.objects.filter(name=CoreRoles.SYSTEM_ADMIN).exists():
        return

    # Suppress output using a dummy buffer
    buffer = io.StringIO()
    call_command('init_core_data', verbosity=0, stdout=buffer)

def setup_admin_permissions(user):
    """Helper to grant the SystemAdmin role to a user"""
    # Ensure core data exists
    if not Role.objects.filter(name=CoreRoles.SYSTEM_ADMIN).exists():
        setup_core_data()

    user.role = Role.objects.get(name=CoreRoles.SYSTEM_ADMIN)
    user.save(update_fields=['role'])
    return user

def assign_role(user, role_name):
    """Helper to give a user one of the seeded roles"""
    if not Role.objects.filter(name=role_name).exists():
        setup_core_data()

    user.role = Role.objects.get(name=role_name)
    user.save(update_fields=['role'])
    return user

def create_organization(code='ORG1', **extra):
    """Create an organization with sensible defaults"""
    from operations.organizations.models import Organization

    defaults = {
        'organization_name': f'{code} Holdings',
        'display_name': f'{code} Display',
        'organization_code': code,
        'register_office': '1 Harbour Road',
        'country': 'India',
    }
    defaults.update(extra)
    return Organization.objects.create(**defaults)

def create_port(code='PORT1', organization=None, **extra):
    """Create a port (and an organization when none is given)"""
    from operations.ports.models import Port

    if organization is None:
        organization = create_organization(code=f'O{code}')
    defaults = {
        'port_name': f'{code} Port',
        'display_name': code,
        'organization': organization,
        'address': 'Dock Street',
        'country': 'India',
        'state': 'Odisha',
    }
    defaults.update(extra)
    return Port.objects.create(**defaults)

def create_terminal(port, short_code='TRM1', **extra):
    """Create a terminal waiting for activation"""
    from operations.terminals.models import Terminal

    defaults = {
        'port': port,
        'terminal_name': f'{short_code} Terminal',
        'short_code': short_code,
        'billing_address': 'Berth 4',
        'billing_city': 'Paradeep',
        'billing_pin_code': '754142',
        'same_as_billing': True,
    }
    defaults.update(extra)
    return Terminal.objects.create(**defaults)

def create_subscription_types():
    """Create the 1/12/24/48 month subscription types"""
    from operations.terminals.models import SubscriptionType

    return {
        months: SubscriptionType.objects.get_or_create(months=months, defaults={'name': label})[0]
        for months, label in SubscriptionType.Months.choices
    }
