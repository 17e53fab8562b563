"""
Roles, Menus and Role Creation Permissions
Database-driven access control and navigation.
"""
from django.core.exceptions import ValidationError
from django.db import models

from core.base import ToggleActiveMixin, TimestampMixin
from core.base.managers import BaseQuerySet
from .core_config import SYSTEM_ADMIN_ROLE_NAMES, USER_TYPE_NAMES
from .permissions import validate_permission_strings


class Role(ToggleActiveMixin, TimestampMixin):
    """
    Role model holding a list of permission strings.
    Users get exactly one role; the role's permissions decide their API and menu access.
    """
    name = models.CharField(max_length=100, unique=True, db_index=True)
    display_name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    permissions = models.JSONField(
        default=list,
        blank=True,
        help_text="Permission strings, e.g. ['ports:read', 'users-access:users:read,write']"
    )

    SEARCH_FIELDS = ('name', 'display_name')
    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'roles'
        verbose_name = 'Role'
        verbose_name_plural = 'Roles'
        ordering = ['name']

    def __str__(self):
        return self.display_name or self.name

    @property
    def is_system_admin_role(self):
        return self.name in SYSTEM_ADMIN_ROLE_NAMES

    def clean(self):
        super().clean()
        errors = validate_permission_strings(self.permissions)
        if errors:
            raise ValidationError({'permissions': errors})

    def delete(self, *args, **kwargs):
        """
        Prevent deletion if role is assigned to users.
        """
        if self.users.exists():
            raise ValidationError(
                f"Cannot delete role '{self.name}' because it is assigned to "
                f"{self.users.count()} user(s)"
            )
        return super().delete(*args, **kwargs)


class Menu(ToggleActiveMixin, TimestampMixin):
    """
    Navigation entry. GLinks are top-level; PLinks hang under a GLink.
    The menu name doubles as the permission section (GLink) or subsection (PLink).
    """

    class MenuType(models.TextChoices):
        GLINK = 'glink', 'GLink'
        PLINK = 'plink', 'PLink'

    name = models.CharField(
        max_length=100,
        unique=True,
        db_index=True,
        help_text="Unique slug, also used in permission strings (e.g. 'users-access')"
    )
    label = models.CharField(max_length=255, help_text="Text shown in navigation")
    icon = models.CharField(max_length=100, blank=True, default='')
    route = models.CharField(max_length=255, blank=True, default='')
    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='children'
    )
    sort_order = models.IntegerField(default=0)
    menu_type = models.CharField(
        max_length=10,
        choices=MenuType.choices,
        default=MenuType.GLINK
    )

    SEARCH_FIELDS = ('name', 'label')
    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'menus'
        verbose_name = 'Menu'
        verbose_name_plural = 'Menus'
        ordering = ['sort_order', 'name']

    def __str__(self):
        return f"{self.label} ({self.menu_type})"

    def clean(self):
        super().clean()
        if self.menu_type == self.MenuType.GLINK and self.parent_id:
            raise ValidationError({'parent': 'A GLink cannot have a parent menu'})

        if self.menu_type == self.MenuType.PLINK:
            if not self.parent_id:
                raise ValidationError({'parent': 'A PLink must have a parent GLink'})
            if self.pk and self.parent_id == self.pk:
                raise ValidationError({'parent': 'A menu cannot be its own parent'})
            if self.parent.menu_type != self.MenuType.GLINK:
                raise ValidationError({'parent': 'The parent of a PLink must be a GLink'})

    def delete(self, *args, **kwargs):
        """
        Prevent deletion of a GLink that still has PLinks.
        """
        if self.children.exists():
            raise ValidationError(
                f"Cannot delete menu '{self.name}' because it has "
                f"{self.children.count()} child menu(s)"
            )
        return super().delete(*args, **kwargs)


class RoleCreationPermission(TimestampMixin):
    """
    Which user types and roles members of a creator role may create.

    Example: PortAdmin may create port_user / terminal_user accounts and
    assign them the TerminalAdmin role.
    """
    creator_role = models.OneToOneField(
        Role,
        on_delete=models.CASCADE,
        related_name='creation_permission'
    )
    allowed_user_types = models.JSONField(
        default=list,
        blank=True,
        help_text="User type names, e.g. ['port_user', 'terminal_user']"
    )
    allowed_roles = models.ManyToManyField(
        Role,
        blank=True,
        related_name='assignable_by'
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'role_creation_permissions'
        verbose_name = 'Role Creation Permission'
        verbose_name_plural = 'Role Creation Permissions'
        ordering = ['creator_role__name']

    def __str__(self):
        return f"{self.creator_role.name} may create {', '.join(self.allowed_user_types or [])}"

    def clean(self):
        super().clean()
        if not isinstance(self.allowed_user_types, list):
            raise ValidationError({'allowed_user_types': 'Must be a list of user type names'})
        unknown = [t for t in self.allowed_user_types if t not in USER_TYPE_NAMES]
        if unknown:
            raise ValidationError({
                'allowed_user_types': f"Unknown user type(s): {', '.join(map(str, unknown))}"
            })
