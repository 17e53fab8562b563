"""
Rules deciding which user types and roles a creator may hand out.

Configuration lives in RoleCreationPermission, one row per creator role.
A PortAdmin without configuration falls back to creating port and terminal
users with any role except the system admin ones.
"""
from .core_config import CoreRoles, DEFAULT_CREATABLE_USER_TYPES, USER_TYPE_NAMES, UserTypes
from .models import RoleCreationPermission


def get_creation_permission(user):
    """Active RoleCreationPermission for the user's role, or None."""
    if not user or not user.role_id:
        return None
    return (
        RoleCreationPermission.objects
        .filter(creator_role_id=user.role_id, is_active=True)
        .prefetch_related('allowed_roles')
        .first()
    )


def _is_port_admin(user):
    return bool(user.role_id) and user.role.name == CoreRoles.PORT_ADMIN


def can_create_user_type(user, type_name) -> bool:
    if user.is_system_admin():
        return True

    if type_name == UserTypes.SUPER_ADMIN and _is_port_admin(user):
        return False

    config = get_creation_permission(user)
    if config is None:
        return _is_port_admin(user) and type_name in DEFAULT_CREATABLE_USER_TYPES

    return type_name in (config.allowed_user_types or [])


def can_assign_role(user, role) -> bool:
    if user.is_system_admin():
        return True

    config = get_creation_permission(user)
    if config is None:
        return _is_port_admin(user) and not role.is_system_admin_role

    return config.allowed_roles.filter(pk=role.pk).exists()


def get_available_user_types(user) -> list:
    if user.is_system_admin():
        return list(USER_TYPE_NAMES)

    config = get_creation_permission(user)
    if config is None:
        return list(DEFAULT_CREATABLE_USER_TYPES) if _is_port_admin(user) else []

    return list(config.allowed_user_types or [])


def get_available_role_ids(user) -> list:
    """
    Role ids the user may assign.

    An empty list for a system admin means "all non system-admin roles";
    callers resolve that against the Role table.
    """
    if user.is_system_admin():
        return []

    config = get_creation_permission(user)
    if config is None:
        return []

    return list(config.allowed_roles.values_list('id', flat=True))
