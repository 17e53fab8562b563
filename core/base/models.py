from django.conf import settings
from django.db import models


class StatusChoices(models.TextChoices):
    """
    Standard status choices for entities across the portal.

    Use this instead of defining custom active/inactive choices in each model.
    Workflow statuses (e.g. terminal activation) define their own TextChoices.
    """
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


class TimestampMixin(models.Model):
    """Adds created_at / updated_at."""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class AuditMixin(TimestampMixin):
    """
    Adds audit fields to track creation and modification metadata.

    Fields:
        - created_at: Timestamp when record was created
        - updated_at: Timestamp when record was last modified
        - created_by: User who created the record (optional)
        - updated_by: User who last modified the record (optional)

    Usage:
        class Terminal(AuditMixin):
            terminal_name = models.CharField(max_length=255)

    Note: created_by and updated_by are set by the service layer from request.user.
    """
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_created',
        help_text="User who created this record"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(app_label)s_%(class)s_updated',
        help_text="User who last updated this record"
    )

    class Meta:
        abstract = True


class ToggleActiveMixin(models.Model):
    """
    Adds an is_active flag with an on/off toggle.

    Organizations, ports, roles and menus are never hard-deleted while they
    are referenced; the UI flips them with PATCH .../toggle-status/ instead.
    """
    is_active = models.BooleanField(
        default=True,
        help_text="Inactive records are hidden from dropdowns and navigation"
    )

    class Meta:
        abstract = True

    def toggle_status(self):
        """Flip is_active and persist. Returns the new value."""
        self.is_active = not self.is_active
        self.save(update_fields=['is_active', 'updated_at'] if hasattr(self, 'updated_at') else ['is_active'])
        return self.is_active


class SoftDeleteMixin(models.Model):
    """
    Mixin for models that support soft deletion.

    Instead of permanently deleting records, they are marked as inactive.
    This preserves referential integrity for contracts and audit history.

    Fields:
        - status: StatusChoices (ACTIVE/INACTIVE)

    Methods:
        - deactivate(): Marks record as inactive (soft delete)
        - reactivate(): Marks record as active again
        - hard_delete(): Permanently deletes the record from database
    """
    status = models.CharField(
        max_length=10,
        choices=StatusChoices.choices,
        default=StatusChoices.ACTIVE,
        help_text="Record status. Set to INACTIVE instead of deleting."
    )

    class Meta:
        abstract = True

    def deactivate(self):
        self.status = StatusChoices.INACTIVE
        self.save(update_fields=['status'])

    def reactivate(self):
        self.status = StatusChoices.ACTIVE
        self.save(update_fields=['status'])

    def update_fields(self, field_updates: dict):
        """
        Apply a dict of field updates, validate, and save.

        Example:
            customer.update_fields({'display_name': 'ACME', 'state': 'Maharashtra'})
        """
        for field_name, value in field_updates.items():
            setattr(self, field_name, value)
        self.full_clean()
        self.save()
        return self

    def hard_delete(self):
        super().delete()
