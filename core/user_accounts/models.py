"""
User Account Models
Handles user authentication, port/terminal scoping and the user audit trail.
"""
from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.core.exceptions import PermissionDenied
from django.db import models

from core.base.managers import BaseQuerySet
from core.roles.core_config import SYSTEM_ADMIN_ROLE_NAMES, USER_TYPES, UserTypes


class UserType(models.Model):
    """
    User type model with three types: super_admin, port_user and terminal_user.
    Decides which port/terminal assignments a user needs.
    """
    type_name = models.CharField(max_length=50, unique=True, db_index=True)
    description = models.TextField(blank=True, default='')

    class Meta:
        db_table = 'user_types'
        verbose_name = 'User Type'
        verbose_name_plural = 'User Types'

    def __str__(self):
        return self.type_name


class CustomUserManager(BaseUserManager.from_queryset(BaseQuerySet)):
    """
    Custom user manager for CustomUser model.
    Handles user creation with different user types.
    """

    USER_TYPE_DESCRIPTIONS = {t['type_name']: t['description'] for t in USER_TYPES}

    def get_by_natural_key(self, username):
        """Login matches the email regardless of case."""
        return self.get(**{f"{self.model.USERNAME_FIELD}__iexact": username})

    def create_user(self, email, first_name, last_name, password=None,
                    user_type_name=UserTypes.PORT_USER, **extra_fields):
        """
        Create and save a user with any user type.

        Args:
            email: User's email address (used for authentication)
            first_name: User's first name
            last_name: User's last name
            password: User's password (will be hashed)
            user_type_name: 'super_admin', 'port_user' or 'terminal_user'
            **extra_fields: Additional fields to set on the user (role, port, phone_number...)

        Returns:
            CustomUser: The created user instance
        """
        if not email:
            raise ValueError('Email is required')
        if not first_name:
            raise ValueError('First name is required')

        email = self.normalize_email(email)

        user_type, _ = UserType.objects.get_or_create(
            type_name=user_type_name,
            defaults={'description': self.USER_TYPE_DESCRIPTIONS.get(user_type_name, '')}
        )

        user = self.model(
            email=email,
            first_name=first_name,
            last_name=last_name or '',
            user_type=user_type,
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, first_name, last_name, password=None, **extra_fields):
        """
        Create and save a super admin user.
        Required by Django for the createsuperuser management command.
        """
        return self.create_user(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password=password,
            user_type_name=UserTypes.SUPER_ADMIN,
            **extra_fields
        )


class CustomUser(AbstractBaseUser):
    """Portal user authenticated by email, scoped to a port and its terminals"""
    email = models.EmailField(unique=True, db_index=True)
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150, blank=True, default='')
    phone_number = models.CharField(max_length=20, blank=True, default='')

    # Relationships
    user_type = models.ForeignKey(
        UserType,
        on_delete=models.PROTECT,
        related_name='users'
    )
    role = models.ForeignKey(
        'roles.Role',
        on_delete=models.PROTECT,
        related_name='users',
        null=True,
        blank=True,
        help_text="Role determines API and menu access"
    )
    port = models.ForeignKey(
        'ports.Port',
        on_delete=models.SET_NULL,
        related_name='users',
        null=True,
        blank=True
    )
    terminals = models.ManyToManyField(
        'terminals.Terminal',
        related_name='users',
        blank=True
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Manager
    objects = CustomUserManager()

    # Django authentication settings
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    SEARCH_FIELDS = ('email', 'first_name', 'last_name')

    class Meta:
        db_table = 'custom_users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['email']

    def __str__(self):
        return f"{self.full_name} ({self.email})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def role_name(self):
        return self.role.name if self.role_id else None

    def is_super_admin(self):
        """
        Check if user is a super admin.

        Returns:
            bool: True if user is super admin, False otherwise
        """
        return self.user_type.type_name == UserTypes.SUPER_ADMIN

    def is_system_admin(self):
        """
        Super admins and holders of the SystemAdmin role bypass permission checks.
        """
        return self.is_super_admin() or self.role_name in SYSTEM_ADMIN_ROLE_NAMES

    def get_role_permissions(self):
        """Permission strings of the user's role; an inactive role grants nothing."""
        if not self.role_id or not self.role.is_active:
            return []
        return list(self.role.permissions or [])

    # Django admin integration
    @property
    def is_staff(self):
        return self.is_super_admin()

    def has_perm(self, perm, obj=None):
        return self.is_active and self.is_super_admin()

    def has_module_perms(self, app_label):
        return self.is_active and self.is_super_admin()

    def delete(self, *args, **kwargs):
        """
        Override delete to prevent deletion of super admin.
        """
        if self.is_super_admin():
            raise PermissionDenied(
                "Cannot delete super admin user. Super admin is protected from deletion."
            )
        return super().delete(*args, **kwargs)

    def save(self, *args, **kwargs):
        """
        Override save to protect super admin properties.
        Prevents changing user_type of existing super admin users.
        """
        if self.pk:
            try:
                old_user = CustomUser.objects.select_related('user_type').get(pk=self.pk)

                if old_user.is_super_admin() and old_user.user_type_id != self.user_type_id:
                    raise PermissionDenied(
                        "Cannot change user type of super admin. Super admin type is protected."
                    )
            except CustomUser.DoesNotExist:
                pass

        return super().save(*args, **kwargs)


class UserAuditLog(models.Model):
    """
    Audit trail of changes made to user accounts.
    One row per administrative action on a user.
    """

    class Action(models.TextChoices):
        CREATED = 'created', 'Created'
        UPDATED = 'updated', 'Updated'
        STATUS_CHANGED = 'status_changed', 'Status Changed'
        ROLE_CHANGED = 'role_changed', 'Role Changed'
        PASSWORD_RESET = 'password_reset', 'Password Reset'
        DELETED = 'deleted', 'Deleted'

    target_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='audit_logs'
    )
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='performed_audit_logs'
    )
    action = models.CharField(max_length=20, choices=Action.choices)
    description = models.TextField(blank=True, default='')
    old_values = models.JSONField(null=True, blank=True)
    new_values = models.JSONField(null=True, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'user_audit_logs'
        verbose_name = 'User Audit Log'
        verbose_name_plural = 'User Audit Logs'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.action} on {self.target_user_id} by {self.performed_by_id}"
