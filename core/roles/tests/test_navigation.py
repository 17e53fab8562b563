"""
Tests for menu permissions and the navigation tree.
"""
from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APIClient

from core.base.test_utils import assign_role, setup_core_data
from core.roles.core_config import CoreRoles
from core.roles.menu_access import (
    find_menu_permission,
    get_menu_permission_levels,
    menu_has_any_permission,
    menu_has_permission,
)
from core.roles.models import Menu, Role
from core.roles.navigation import build_menu_tree, find_expanded_parents

User = get_user_model()


def setUpModule():
    """Run once for the entire module at the beginning"""
    setup_core_data()


def _user_with_permissions(email, permissions):
    role = Role.objects.create(name=f'role-{email}', display_name=email, permissions=permissions)
    return User.objects.create_user(
        email=email,
        first_name='Menu',
        last_name='User',
        password='TestPass123',
        role=role
    )


class MenuAccessTest(TestCase):
    """Test GLink/PLink permission lookups"""

    def test_find_menu_permission(self):
        permissions = ['ports:read', 'users-access:users:read,write']
        self.assertEqual(find_menu_permission(permissions, 'ports').raw, 'ports:read')
        self.assertEqual(
            find_menu_permission(permissions, 'users', 'users-access').raw,
            'users-access:users:read,write'
        )
        self.assertIsNone(find_menu_permission(permissions, 'roles', 'users-access'))

    def test_plink_permission_also_grants_glink(self):
        user = _user_with_permissions('plink@example.com', ['users-access:users:read'])
        self.assertTrue(menu_has_any_permission(user, 'users-access'))
        self.assertTrue(menu_has_any_permission(user, 'users', 'users-access'))
        self.assertFalse(menu_has_any_permission(user, 'roles', 'users-access'))

    def test_levels_are_literal_for_three_part_strings(self):
        user = _user_with_permissions('literal@example.com', ['users-access:users:write'])
        levels = get_menu_permission_levels(user, 'users', 'users-access')
        self.assertEqual(levels, {'read': False, 'write': True, 'manage': False})
        self.assertTrue(menu_has_permission(user, 'users', 'write', 'users-access'))
        self.assertFalse(menu_has_permission(user, 'users', 'read', 'users-access'))

    def test_two_part_strings_carry_no_levels(self):
        user = _user_with_permissions('twopart@example.com', ['ports:read,write'])
        self.assertTrue(menu_has_any_permission(user, 'ports'))
        self.assertEqual(
            get_menu_permission_levels(user, 'ports'),
            {'read': False, 'write': False, 'manage': False}
        )

    def test_wildcard_section_does_not_open_menus(self):
        user = _user_with_permissions('wildcard@example.com', ['*:read'])
        self.assertFalse(menu_has_any_permission(user, 'menu-management'))
        self.assertFalse(menu_has_permission(user, 'roles', 'read', 'users-access'))
        self.assertEqual(build_menu_tree(user), [])

    def test_system_admin_grants_everything(self):
        user = _user_with_permissions('admin@example.com', [])
        assign_role(user, CoreRoles.SYSTEM_ADMIN)
        self.assertEqual(
            get_menu_permission_levels(user, 'ports'),
            {'read': True, 'write': True, 'manage': True}
        )


class BuildMenuTreeTest(TestCase):
    """Test the permission-filtered GLink/PLink tree"""

    def test_tree_filters_by_permission(self):
        user = _user_with_permissions('tree@example.com', ['dashboard:read', 'users-access:users:read'])
        tree = build_menu_tree(user)

        self.assertEqual([node['name'] for node in tree], ['dashboard', 'users-access'])
        users_access = tree[1]
        self.assertEqual([child['name'] for child in users_access['children']], ['users'])
        self.assertEqual(users_access['children'][0]['permissions']['read'], True)

    def test_tree_sorted_and_excludes_system_config(self):
        admin = _user_with_permissions('treeadmin@example.com', [])
        assign_role(admin, CoreRoles.SYSTEM_ADMIN)
        tree = build_menu_tree(admin)

        names = [node['name'] for node in tree]
        self.assertNotIn('system-config', names)
        self.assertEqual(names[0], 'dashboard')
        orders = [node['sort_order'] for node in tree]
        self.assertEqual(orders, sorted(orders))
        users_access = next(node for node in tree if node['name'] == 'users-access')
        self.assertEqual(
            [child['name'] for child in users_access['children']],
            ['users', 'roles', 'role-creation']
        )

    def test_inactive_menus_hidden(self):
        Menu.objects.filter(name='roles').update(is_active=False)
        admin = _user_with_permissions('inactive@example.com', [])
        assign_role(admin, CoreRoles.SYSTEM_ADMIN)
        tree = build_menu_tree(admin)
        users_access = next(node for node in tree if node['name'] == 'users-access')
        self.assertNotIn('roles', [child['name'] for child in users_access['children']])

    def test_empty_route_and_icon_become_none(self):
        user = _user_with_permissions('route@example.com', ['users-access:users:read'])
        tree = build_menu_tree(user)
        self.assertIsNone(tree[0]['route'])


class FindExpandedParentsTest(SimpleTestCase):
    """Test which parents auto-expand for the current page"""

    def setUp(self):
        self.tree = [
            {'id': 1, 'name': 'dashboard', 'route': '/dashboard', 'children': []},
            {'id': 2, 'name': 'users-access', 'route': None, 'children': [
                {'id': 21, 'name': 'users', 'route': '/users', 'children': []},
                {'id': 22, 'name': 'roles', 'route': '/roles', 'children': []},
            ]},
            {'id': 3, 'name': 'ports', 'route': '/ports', 'children': []},
        ]

    def test_child_matches_active_section(self):
        self.assertEqual(find_expanded_parents(self.tree, active_section='roles'), {2})
        self.assertEqual(find_expanded_parents(self.tree, active_section='21'), {2})

    def test_child_route_in_path(self):
        self.assertEqual(find_expanded_parents(self.tree, current_path='/users/5/edit'), {2})

    def test_parent_matches(self):
        self.assertEqual(find_expanded_parents(self.tree, active_section='ports'), {3})
        self.assertEqual(find_expanded_parents(self.tree, current_path='/dashboard'), {1})

    def test_child_rule_wins_over_parent_rule(self):
        self.assertEqual(
            find_expanded_parents(self.tree, active_section='ports', current_path='/roles'),
            {2}
        )

    def test_no_match(self):
        self.assertEqual(find_expanded_parents(self.tree, active_section='unknown', current_path='/x'), set())
        self.assertEqual(find_expanded_parents([], active_section='roles'), set())


class MenuTreeAPITest(TestCase):
    """Test GET /api/menus/tree/"""

    def setUp(self):
        self.client = APIClient()
        self.user = _user_with_permissions('apitree@example.com', ['users-access:users:read,write'])
        self.client.force_authenticate(user=self.user)

    def test_tree_with_expanded_parent(self):
        response = self.client.get('/api/menus/tree/', {'path': '/users'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['tree']), 1)
        self.assertEqual(response.data['expanded'], [response.data['tree'][0]['id']])

    def test_tree_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get('/api/menus/tree/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
