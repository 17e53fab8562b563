"""
Initialize Port Reference Data

This management command populates the database with the reference data the
terminal workflow needs:
- The JSW Infrastructure organization
- Its ports (JSWPP, JSWDP)
- Subscription types (1, 12, 24 and 48 months)

Usage:
    python manage.py init_port_data

This is idempotent - safe to run multiple times.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from operations.organizations.models import Organization
from operations.ports.models import Port
from operations.terminals.models import SubscriptionType

ORGANIZATION = {
    'organization_code': 'JSWIL',
    'organization_name': 'JSW Infrastructure Limited',
    'display_name': 'JSW Infrastructure',
    'register_office': 'JSW Centre, Bandra Kurla Complex, Bandra (East), Mumbai - 400051',
    'country': 'India',
    'telephone': '+91-22-4286-1000',
    'fax': '+91-22-4286-3000',
    'website': 'https://www.jsw.in',
}

PORTS = [
    {'display_name': 'JSWPP', 'port_name': 'JSW Paradeep Port',
     'address': 'Paradeep, Odisha', 'country': 'India', 'state': 'Odisha'},
    {'display_name': 'JSWDP', 'port_name': 'JSW Dharamtar Port',
     'address': 'Dharamtar, Maharashtra', 'country': 'India', 'state': 'Maharashtra'},
]

SUBSCRIPTION_TYPES = [
    {'months': 1, 'name': '1 Month'},
    {'months': 12, 'name': '12 Months'},
    {'months': 24, 'name': '24 Months'},
    {'months': 48, 'name': '48 Months'},
]


class Command(BaseCommand):
    help = 'Initialize port reference data (organization, ports, subscription types)'

    def handle(self, *args, **options):
        self.stdout.write('Starting port data initialization...\n')

        try:
            with transaction.atomic():
                # 1. Organization
                code = ORGANIZATION['organization_code']
                organization, created = Organization.objects.get_or_create(
                    organization_code=code,
                    defaults={k: v for k, v in ORGANIZATION.items() if k != 'organization_code'}
                )
                if created:
                    self.stdout.write(f"  Created organization: {organization.organization_name}")
                else:
                    self.stdout.write(f"  - Organization already exists: {organization.organization_name}")

                # 2. Ports
                self.stdout.write('Creating ports...')
                ports_created = 0
                for port_data in PORTS:
                    defaults = {k: v for k, v in port_data.items() if k != 'display_name'}
                    defaults['organization'] = organization
                    port, created = Port.objects.get_or_create(
                        display_name=port_data['display_name'],
                        defaults=defaults
                    )
                    if created:
                        ports_created += 1
                        self.stdout.write(f"  Created port: {port.display_name}")
                    else:
                        self.stdout.write(f"  - Port already exists: {port.display_name}")

                self.stdout.write(self.style.SUCCESS(
                    f"Ports: {ports_created} created, {len(PORTS) - ports_created} already existed\n"
                ))

                # 3. Subscription types
                self.stdout.write('Creating subscription types...')
                types_created = 0
                for type_data in SUBSCRIPTION_TYPES:
                    subscription_type, created = SubscriptionType.objects.get_or_create(
                        months=type_data['months'],
                        defaults={'name': type_data['name']}
                    )
                    if created:
                        types_created += 1
                        self.stdout.write(f"  Created subscription type: {subscription_type.name}")
                    else:
                        self.stdout.write(f"  - Subscription type already exists: {subscription_type.name}")

                self.stdout.write(self.style.SUCCESS(
                    f"Subscription types: {types_created} created, "
                    f"{len(SUBSCRIPTION_TYPES) - types_created} already existed\n"
                ))

                self.stdout.write(self.style.SUCCESS('=' * 60))
                self.stdout.write(self.style.SUCCESS('PORT DATA INITIALIZATION COMPLETE'))
                self.stdout.write(self.style.SUCCESS('=' * 60))

        except Exception as e:
            self.stdout.write(self.style.ERROR(f'Error: {e}'))
            raise
