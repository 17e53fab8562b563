"""
Permission string parsing and checking.

A role carries a list of permission strings:

    "dashboard:read"                         section + levels
    "users-access:users:read,write,manage"   section + subsection + levels
    "*:manage"                               wildcard section

Levels are hierarchical (read < write < manage): holding a level grants every
weaker one. This module is the only place permission strings are interpreted;
API decorators, /auth/me and the navigation tree all call into it.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .core_config import LEVEL_HIERARCHY, PermissionLevels, WILDCARD_SECTION


@dataclass
class ParsedPermission:
    section: str
    subsection: Optional[str] = None
    levels: List[str] = field(default_factory=list)
    raw: str = ''

    @property
    def has_explicit_levels(self):
        """True when the string carried a subsection part (three parts)."""
        return self.subsection is not None


@dataclass
class PermissionCheck:
    """A single required permission, e.g. PermissionCheck('ports', level='write')."""
    section: str
    subsection: Optional[str] = None
    level: str = PermissionLevels.READ

    def __str__(self):
        return format_requirement(self.section, self.subsection, self.level)


def parse_permission(permission: str) -> ParsedPermission:
    """
    Parse one permission string.

    Two parts give section + levels, three parts give section + subsection +
    levels. Anything else is treated as a bare section with read access.
    """
    parts = permission.split(':')
    levels = parts[-1].split(',')

    if len(parts) == 2:
        return ParsedPermission(section=parts[0], levels=levels, raw=permission)
    if len(parts) == 3:
        return ParsedPermission(section=parts[0], subsection=parts[1], levels=levels, raw=permission)
    return ParsedPermission(section=parts[0] or permission, levels=[PermissionLevels.READ], raw=permission)


def parse_permissions(permissions: Iterable[str]) -> List[ParsedPermission]:
    return [parse_permission(p) for p in permissions or []]


def level_value(level: str) -> int:
    """Hierarchy value for a level name; unknown names rank below read."""
    return LEVEL_HIERARCHY.get(level, -1)


def has_permission(user_permissions, is_system_admin, section, subsection=None, level=PermissionLevels.READ) -> bool:
    """
    Check a required section[:subsection]:level against a permission list.

    Args:
        user_permissions: List of permission strings from the user's role
        is_system_admin: System admins are granted everything
        section: Required section (e.g. 'terminals')
        subsection: Optional required subsection (e.g. 'users')
        level: Required level ('read', 'write', 'manage')

    A permission without a subsection covers every subsection of its section.
    """
    if is_system_admin:
        return True

    required = LEVEL_HIERARCHY[level]

    for permission in parse_permissions(user_permissions):
        if permission.section != section and permission.section != WILDCARD_SECTION:
            continue
        if subsection and permission.subsection and permission.subsection != subsection:
            continue
        if any(level_value(held) >= required for held in permission.levels):
            return True

    return False


def format_requirement(section, subsection=None, level=PermissionLevels.READ) -> str:
    """Render a requirement back into permission-string form."""
    if subsection:
        return f"{section}:{subsection}:{level}"
    return f"{section}:{level}"


def validate_permission_strings(permissions) -> List[str]:
    """
    Return a list of error messages for malformed permission strings.

    Empty list means the permissions are valid.
    """
    errors = []
    if not isinstance(permissions, list):
        return ['Permissions must be a list of strings']

    for permission in permissions:
        if not isinstance(permission, str) or not permission.strip():
            errors.append(f"Invalid permission entry: {permission!r}")
            continue
        parts = permission.split(':')
        # Other shapes are read as a bare section with read access
        if len(parts) not in (2, 3):
            continue
        unknown = [lvl for lvl in parts[-1].split(',') if lvl not in LEVEL_HIERARCHY]
        if unknown:
            errors.append(
                f"Invalid permission '{permission}': unknown level(s) {', '.join(unknown)}"
            )
    return errors


def user_has_permission(user, section, subsection=None, level=PermissionLevels.READ) -> bool:
    """Check a permission for a CustomUser using its role permissions."""
    if user is None or not user.is_authenticated:
        return False
    return has_permission(
        user.get_role_permissions(),
        user.is_system_admin(),
        section,
        subsection,
        level,
    )


class PermissionChecker:
    """
    Convenience wrapper bound to a single user.

        checker = PermissionChecker(request.user)
        if checker.can_delete('terminals'):
            ...
    """

    def __init__(self, user):
        self.user = user
        self.is_system_admin = bool(user and user.is_authenticated and user.is_system_admin())
        self.permissions = user.get_role_permissions() if user and user.is_authenticated else []

    def has_permission(self, section, subsection=None, level=PermissionLevels.READ):
        return has_permission(self.permissions, self.is_system_admin, section, subsection, level)

    def can_read(self, section, subsection=None):
        return self.has_permission(section, subsection, PermissionLevels.READ)

    def can_write(self, section, subsection=None):
        return self.has_permission(section, subsection, PermissionLevels.WRITE)

    def can_manage(self, section, subsection=None):
        return self.has_permission(section, subsection, PermissionLevels.MANAGE)

    def can_edit(self, section, subsection=None):
        return self.can_write(section, subsection)

    def can_create(self, section, subsection=None):
        return self.can_write(section, subsection)

    def can_delete(self, section, subsection=None):
        return self.can_manage(section, subsection)

    def has_any(self, checks: Iterable[PermissionCheck]):
        return any(self.has_permission(c.section, c.subsection, c.level) for c in checks)

    def has_all(self, checks: Iterable[PermissionCheck]):
        return all(self.has_permission(c.section, c.subsection, c.level) for c in checks)

    def get_user_permissions(self) -> List[ParsedPermission]:
        if self.is_system_admin:
            return [ParsedPermission(
                section=WILDCARD_SECTION,
                levels=[PermissionLevels.READ, PermissionLevels.WRITE, PermissionLevels.MANAGE],
                raw='*:read,write,manage',
            )]
        return parse_permissions(self.permissions)

    def get_permission_summary(self) -> dict:
        permissions = self.get_user_permissions()
        summary = {
            'total_permissions': len(permissions),
            'read_count': 0,
            'write_count': 0,
            'manage_count': 0,
            'sections': [],
        }
        for permission in permissions:
            if permission.section not in summary['sections']:
                summary['sections'].append(permission.section)
            for level in permission.levels:
                key = f'{level}_count'
                if key in summary:
                    summary[key] += 1
        return summary
