"""
Initialize Core System Data

This management command populates the database with core system data:
- User types (super_admin, port_user, terminal_user)
- Roles (SystemAdmin, PortAdmin, TerminalAdmin)
- Navigation menus (GLinks, then PLinks)

Usage:
    python manage.py init_core_data

This is idempotent - safe to run multiple times. Existing records are left
untouched so administrators' edits survive re-runs.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from core.roles.core_config import CORE_MENUS, CORE_ROLES, USER_TYPES
from core.roles.models import Menu, Role
from core.user_accounts.models import UserType


class Command(BaseCommand):
    help = 'Initialize core system data (user types, roles, menus)'

    def handle(self, *args, **options):
        self.stdout.write('Starting core data initialization...\n')

        try:
            with transaction.atomic():
                # 1. User types
                self.stdout.write('Creating user types...')
                types_created = 0
                for type_data in USER_TYPES:
                    user_type, created = UserType.objects.get_or_create(
                        type_name=type_data['type_name'],
                        defaults={'description': type_data['description']}
                    )
                    if created:
                        types_created += 1
                        self.stdout.write(f"  Created user type: {user_type.type_name}")
                    else:
                        self.stdout.write(f"  - User type already exists: {user_type.type_name}")

                self.stdout.write(self.style.SUCCESS(
                    f"User types: {types_created} created, {len(USER_TYPES) - types_created} already existed\n"
                ))

                # 2. Roles
                self.stdout.write('Creating roles...')
                roles_created = 0
                for role_data in CORE_ROLES:
                    role, created = Role.objects.get_or_create(
                        name=role_data['name'],
                        defaults={
                            'display_name': role_data['display_name'],
                            'description': role_data['description'],
                            'permissions': role_data['permissions'],
                        }
                    )
                    if created:
                        roles_created += 1
                        self.stdout.write(f"  Created role: {role.name}")
                    else:
                        self.stdout.write(f"  - Role already exists: {role.name}")

                self.stdout.write(self.style.SUCCESS(
                    f"Roles: {roles_created} created, {len(CORE_ROLES) - roles_created} already existed\n"
                ))

                # 3. Menus (GLinks are listed before their PLinks)
                self.stdout.write('Creating menus...')
                menus_created = 0
                for menu_data in CORE_MENUS:
                    parent = None
                    if menu_data['parent']:
                        parent = Menu.objects.get(name=menu_data['parent'])

                    menu, created = Menu.objects.get_or_create(
                        name=menu_data['name'],
                        defaults={
                            'label': menu_data['label'],
                            'icon': menu_data['icon'],
                            'route': menu_data['route'],
                            'menu_type': menu_data['menu_type'],
                            'sort_order': menu_data['sort_order'],
                            'parent': parent,
                        }
                    )
                    if created:
                        menus_created += 1
                        self.stdout.write(f"  Created {menu.menu_type}: {menu.name}")
                    else:
                        self.stdout.write(f"  - Menu already exists: {menu.name}")

                self.stdout.write(self.style.SUCCESS(
                    f"Menus: {menus_created} created, {len(CORE_MENUS) - menus_created} already existed\n"
                ))

                # Summary
                self.stdout.write(self.style.SUCCESS('=' * 60))
                self.stdout.write(self.style.SUCCESS('CORE DATA INITIALIZATION COMPLETE'))
                self.stdout.write(self.style.SUCCESS('=' * 60))
                if types_created + roles_created + menus_created == 0:
                    self.stdout.write('All data already exists - no changes made')

        except Exception as e:
            self.stdout.write(self.style.ERROR(f'Error: {e}'))
            raise
