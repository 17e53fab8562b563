"""
Tests for permission string parsing and checking.
"""
from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase

from core.base.test_utils import assign_role, setup_core_data
from core.roles.core_config import CoreRoles
from core.roles.models import Role
from core.roles.permissions import (
    PermissionChecker,
    PermissionCheck,
    format_requirement,
    has_permission,
    parse_permission,
    user_has_permission,
    validate_permission_strings,
)

User = get_user_model()


def setUpModule():
    """Run once for the entire module at the beginning"""
    setup_core_data()


class ParsePermissionTest(SimpleTestCase):
    """Test parsing of section[:subsection]:levels strings"""

    def test_two_part_permission(self):
        parsed = parse_permission('ports:read,write')
        self.assertEqual(parsed.section, 'ports')
        self.assertIsNone(parsed.subsection)
        self.assertEqual(parsed.levels, ['read', 'write'])
        self.assertFalse(parsed.has_explicit_levels)

    def test_three_part_permission(self):
        parsed = parse_permission('users-access:users:read,manage')
        self.assertEqual(parsed.section, 'users-access')
        self.assertEqual(parsed.subsection, 'users')
        self.assertEqual(parsed.levels, ['read', 'manage'])
        self.assertTrue(parsed.has_explicit_levels)

    def test_bare_section_defaults_to_read(self):
        parsed = parse_permission('dashboard')
        self.assertEqual(parsed.section, 'dashboard')
        self.assertEqual(parsed.levels, ['read'])

    def test_wildcard(self):
        parsed = parse_permission('*:manage')
        self.assertEqual(parsed.section, '*')
        self.assertEqual(parsed.levels, ['manage'])


class HasPermissionTest(SimpleTestCase):
    """Test the hierarchical permission check"""

    def test_higher_level_grants_lower(self):
        self.assertTrue(has_permission(['terminals:manage'], False, 'terminals', level='read'))
        self.assertTrue(has_permission(['terminals:write'], False, 'terminals', level='write'))
        self.assertFalse(has_permission(['terminals:write'], False, 'terminals', level='manage'))

    def test_other_section_does_not_match(self):
        self.assertFalse(has_permission(['ports:manage'], False, 'terminals'))

    def test_wildcard_section(self):
        self.assertTrue(has_permission(['*:manage'], False, 'contracts', level='manage'))
        self.assertFalse(has_permission(['*:read'], False, 'contracts', level='write'))

    def test_system_admin_bypasses(self):
        self.assertTrue(has_permission([], True, 'anything', 'at-all', 'manage'))

    def test_permission_without_subsection_covers_subsections(self):
        self.assertTrue(has_permission(['users-access:write'], False, 'users-access', 'users', 'write'))

    def test_subsection_must_match(self):
        permissions = ['users-access:roles:manage']
        self.assertTrue(has_permission(permissions, False, 'users-access', 'roles', 'manage'))
        self.assertFalse(has_permission(permissions, False, 'users-access', 'users', 'read'))

    def test_subsection_permission_satisfies_section_check(self):
        self.assertTrue(has_permission(['users-access:users:read'], False, 'users-access'))

    def test_unknown_level_is_ignored(self):
        self.assertFalse(has_permission(['ports:admin'], False, 'ports', level='read'))

    def test_empty_permissions(self):
        self.assertFalse(has_permission([], False, 'dashboard'))
        self.assertFalse(has_permission(None, False, 'dashboard'))


class ValidatePermissionStringsTest(SimpleTestCase):

    def test_valid_permissions(self):
        self.assertEqual(
            validate_permission_strings(['ports:read', 'users-access:users:read,write', '*:manage']),
            []
        )

    def test_not_a_list(self):
        self.assertEqual(len(validate_permission_strings('ports:read')), 1)

    def test_invalid_entries(self):
        errors = validate_permission_strings(['ports:delete', 'users-access:users:read,own', '', 7])
        self.assertEqual(len(errors), 4)

    def test_bare_section_is_valid(self):
        self.assertEqual(validate_permission_strings(['dashboard', 'a:b:c:read']), [])

    def test_format_requirement(self):
        self.assertEqual(format_requirement('ports', level='write'), 'ports:write')
        self.assertEqual(format_requirement('users-access', 'users', 'manage'), 'users-access:users:manage')
        self.assertEqual(str(PermissionCheck('terminals')), 'terminals:read')


class PermissionCheckerTest(TestCase):
    """Test permission checks bound to real users"""

    def setUp(self):
        self.port_admin = User.objects.create_user(
            email='portadmin@example.com',
            first_name='Port',
            last_name='Admin',
            password='TestPass123'
        )
        assign_role(self.port_admin, CoreRoles.PORT_ADMIN)
        self.system_admin = User.objects.create_user(
            email='sysadmin@example.com',
            first_name='System',
            last_name='Admin',
            password='TestPass123'
        )
        assign_role(self.system_admin, CoreRoles.SYSTEM_ADMIN)

    def test_port_admin_permissions(self):
        checker = PermissionChecker(self.port_admin)
        self.assertTrue(checker.can_manage('terminals'))
        self.assertTrue(checker.can_read('ports'))
        self.assertFalse(checker.can_write('ports'))
        self.assertTrue(checker.can_delete('users-access', 'users'))
        self.assertFalse(checker.can_create('users-access', 'roles'))
        self.assertFalse(checker.can_read('menu-management'))

    def test_has_any_and_all(self):
        checker = PermissionChecker(self.port_admin)
        checks = [PermissionCheck('ports', level='write'), PermissionCheck('terminals', level='write')]
        self.assertTrue(checker.has_any(checks))
        self.assertFalse(checker.has_all(checks))

    def test_system_admin_summary(self):
        summary = PermissionChecker(self.system_admin).get_permission_summary()
        self.assertEqual(summary['sections'], ['*'])
        self.assertEqual(summary['manage_count'], 1)

    def test_summary_counts_levels(self):
        summary = PermissionChecker(self.port_admin).get_permission_summary()
        self.assertEqual(summary['total_permissions'], 6)
        self.assertIn('users-access', summary['sections'])
        self.assertEqual(summary['sections'].count('users-access'), 1)

    def test_inactive_role_grants_nothing(self):
        role = Role.objects.get(name=CoreRoles.PORT_ADMIN)
        role.toggle_status()
        self.port_admin.refresh_from_db()
        self.assertFalse(user_has_permission(self.port_admin, 'terminals'))

    def test_user_without_role(self):
        user = User.objects.create_user(
            email='norole@example.com',
            first_name='No',
            last_name='Role',
            password='TestPass123'
        )
        self.assertFalse(user_has_permission(user, 'dashboard'))
