"""
Core System Configuration - Hardcoded Setup
============================================

Defines the foundational structure for the permission system:
- 3 permission levels: read, write, manage
- 3 user types: super_admin, port_user, terminal_user
- Permission sections (one per navigation GLink)
- Default roles (SystemAdmin, PortAdmin, TerminalAdmin)
- Default navigation menus (GLinks and PLinks)

This data is used by the init_core_data command to populate the database.
No fixtures needed - this is the source of truth.
"""

# ============================================================================
# PERMISSION LEVELS
# ============================================================================

class PermissionLevels:
    """Permission level identifiers, ordered from weakest to strongest."""
    READ = 'read'
    WRITE = 'write'
    MANAGE = 'manage'


LEVEL_HIERARCHY = {
    PermissionLevels.READ: 0,
    PermissionLevels.WRITE: 1,
    PermissionLevels.MANAGE: 2,
}

WILDCARD_SECTION = '*'


# ============================================================================
# USER TYPES
# ============================================================================

class UserTypes:
    """User type identifiers."""
    SUPER_ADMIN = 'super_admin'
    PORT_USER = 'port_user'
    TERMINAL_USER = 'terminal_user'


USER_TYPES = [
    {'type_name': 'super_admin', 'description': 'Super administrator with full system access'},
    {'type_name': 'port_user', 'description': 'User scoped to a single port'},
    {'type_name': 'terminal_user', 'description': 'User scoped to one or more terminals of a port'},
]

USER_TYPE_NAMES = [user_type['type_name'] for user_type in USER_TYPES]

# Types a PortAdmin may create when no RoleCreationPermission is configured
DEFAULT_CREATABLE_USER_TYPES = [UserTypes.PORT_USER, UserTypes.TERMINAL_USER]


# ============================================================================
# ROLES
# ============================================================================

class CoreRoles:
    """Core role identifiers."""
    SYSTEM_ADMIN = 'SystemAdmin'
    PORT_ADMIN = 'PortAdmin'
    TERMINAL_ADMIN = 'TerminalAdmin'


# Role names that carry system administrator rights
SYSTEM_ADMIN_ROLE_NAMES = ('SystemAdmin', 'System Admin')


# ============================================================================
# PERMISSION SECTIONS
# ============================================================================

class PermissionSections:
    """Section identifiers used in permission strings and API decorators."""
    DASHBOARD = 'dashboard'
    ORGANIZATIONS = 'organizations'
    PORTS = 'ports'
    TERMINALS = 'terminals'
    TERMINAL_ACTIVATION = 'terminal-activation'
    CONTRACTS = 'contracts'
    USERS_ACCESS = 'users-access'
    MENU_MANAGEMENT = 'menu-management'
    SYSTEM_CONFIG = 'system-config'


class UsersAccessSubsections:
    USERS = 'users'
    ROLES = 'roles'
    ROLE_CREATION = 'role-creation'


CORE_ROLES = [
    {
        'name': 'SystemAdmin',
        'display_name': 'System Admin',
        'description': 'Full access to every section of the portal',
        'permissions': ['*:manage'],
    },
    {
        'name': 'PortAdmin',
        'display_name': 'Port Admin',
        'description': 'Manages terminals, customers and users of a port',
        'permissions': [
            'dashboard:read',
            'ports:read',
            'terminals:read,write,manage',
            'contracts:read,write,manage',
            'users-access:users:read,write,manage',
            'users-access:roles:read',
        ],
    },
    {
        'name': 'TerminalAdmin',
        'display_name': 'Terminal Admin',
        'description': 'Manages customers and contracts of assigned terminals',
        'permissions': [
            'dashboard:read',
            'terminals:read',
            'contracts:read,write',
        ],
    },
]


# ============================================================================
# MENUS
# ============================================================================

# GLinks first; PLinks reference their parent by name.
CORE_MENUS = [
    {'name': 'dashboard', 'label': 'Dashboard', 'icon': 'Home', 'route': '/dashboard',
     'menu_type': 'glink', 'sort_order': 1, 'parent': None},
    {'name': 'organizations', 'label': 'Organizations', 'icon': 'Building2', 'route': '/organizations',
     'menu_type': 'glink', 'sort_order': 2, 'parent': None},
    {'name': 'ports', 'label': 'Ports', 'icon': 'Anchor', 'route': '/ports',
     'menu_type': 'glink', 'sort_order': 3, 'parent': None},
    {'name': 'terminal-activation', 'label': 'Terminal Activation', 'icon': 'Power',
     'route': '/terminal-activation', 'menu_type': 'glink', 'sort_order': 4, 'parent': None},
    {'name': 'contracts', 'label': 'Customers & Contracts', 'icon': 'FileText', 'route': '/customers',
     'menu_type': 'glink', 'sort_order': 5, 'parent': None},
    {'name': 'users-access', 'label': 'Users & Access', 'icon': 'Users', 'route': '',
     'menu_type': 'glink', 'sort_order': 6, 'parent': None},
    {'name': 'menu-management', 'label': 'Menu Management', 'icon': 'Menu', 'route': '/menu-management',
     'menu_type': 'glink', 'sort_order': 7, 'parent': None},
    {'name': 'system-config', 'label': 'System Configuration', 'icon': 'Settings', 'route': '/system-config',
     'menu_type': 'glink', 'sort_order': 99, 'parent': None},

    {'name': 'users', 'label': 'Users', 'icon': 'User', 'route': '/users',
     'menu_type': 'plink', 'sort_order': 1, 'parent': 'users-access'},
    {'name': 'roles', 'label': 'Roles', 'icon': 'Shield', 'route': '/roles',
     'menu_type': 'plink', 'sort_order': 2, 'parent': 'users-access'},
    {'name': 'role-creation', 'label': 'Role Creation Rules', 'icon': 'UserCog',
     'route': '/role-creation-config', 'menu_type': 'plink', 'sort_order': 3, 'parent': 'users-access'},
]

# Never shown in the left navigation tree
NAVIGATION_EXCLUDED_MENUS = ('system-config',)
