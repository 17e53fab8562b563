"""
Menu-level permission checks.

A GLink is granted by any permission whose section is the GLink name; a PLink
by a permission whose section is the parent GLink and whose subsection is the
PLink name:

    "ports:read"                      -> GLink 'ports' visible, no explicit levels
    "users-access:users:read,write"   -> GLink 'users-access' and PLink 'users' visible

Unlike API checks, menu levels are read literally from three-part strings:
'write' does not imply 'read' here. Only system admins bypass
these checks; a wildcard section grants API access, not menus.
"""
from typing import Optional

from .core_config import PermissionLevels
from .permissions import ParsedPermission, parse_permissions

NO_LEVELS = {
    PermissionLevels.READ: False,
    PermissionLevels.WRITE: False,
    PermissionLevels.MANAGE: False,
}

ALL_LEVELS = {
    PermissionLevels.READ: True,
    PermissionLevels.WRITE: True,
    PermissionLevels.MANAGE: True,
}


def _matches(permission: ParsedPermission, menu_name, parent_menu_name=None):
    if parent_menu_name:
        return permission.section == parent_menu_name and permission.subsection == menu_name
    return permission.section == menu_name


def find_menu_permission(permissions, menu_name, parent_menu_name=None) -> Optional[ParsedPermission]:
    """First permission granting the given menu, or None."""
    for permission in parse_permissions(permissions):
        if len(permission.raw.split(':')) < 2:
            continue
        if _matches(permission, menu_name, parent_menu_name):
            return permission
    return None


def _user_context(user):
    if user is None or not user.is_authenticated:
        return False, []
    return user.is_system_admin(), user.get_role_permissions()


def get_menu_permission_levels(user, menu_name, parent_menu_name=None) -> dict:
    """Return {'read': bool, 'write': bool, 'manage': bool} for a menu."""
    is_system_admin, permissions = _user_context(user)
    if is_system_admin:
        return dict(ALL_LEVELS)

    permission = find_menu_permission(permissions, menu_name, parent_menu_name)
    if permission is None or not permission.has_explicit_levels:
        return dict(NO_LEVELS)

    return {level: level in permission.levels for level in NO_LEVELS}


def menu_has_permission(user, menu_name, permission_type, parent_menu_name=None) -> bool:
    return get_menu_permission_levels(user, menu_name, parent_menu_name)[permission_type]


def menu_has_any_permission(user, menu_name, parent_menu_name=None) -> bool:
    """Whether the menu should appear in navigation at all."""
    is_system_admin, permissions = _user_context(user)
    if is_system_admin:
        return True
    return find_menu_permission(permissions, menu_name, parent_menu_name) is not None
