"""
Ports and their administrator contacts.
"""
import secrets
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from core.base import TimestampMixin, ToggleActiveMixin
from core.base.managers import BaseQuerySet


class Port(ToggleActiveMixin, TimestampMixin):
    """
    A port run by an organization. Terminals operate inside a port.
    """
    port_name = models.CharField(max_length=255)
    display_name = models.CharField(
        max_length=6,
        unique=True,
        help_text="Short code shown in lists, at most 6 characters (e.g. JSWPP)"
    )
    organization = models.ForeignKey(
        'organizations.Organization',
        on_delete=models.PROTECT,
        related_name='ports'
    )
    address = models.TextField()
    country = models.CharField(max_length=100)
    state = models.CharField(max_length=100)

    SEARCH_FIELDS = ('port_name', 'display_name')
    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'ports'
        verbose_name = 'Port'
        verbose_name_plural = 'Ports'
        ordering = ['port_name']

    def __str__(self):
        return f"{self.port_name} ({self.display_name})"

    def delete(self, *args, **kwargs):
        """
        Prevent deletion while terminals still belong to the port.
        """
        if self.terminals.exists():
            raise ValidationError(
                f"Cannot delete port '{self.port_name}' because it has "
                f"{self.terminals.count()} terminal(s)"
            )
        return super().delete(*args, **kwargs)


class PortAdminContact(TimestampMixin):
    """
    Administrator contact for a port.

    A contact starts inactive with a verification token; verifying the token
    activates it. Tokens are stored for the verification link only.
    """

    class Status(models.TextChoices):
        INACTIVE = 'inactive', 'Inactive'
        ACTIVE = 'active', 'Active'

    port = models.ForeignKey(Port, on_delete=models.CASCADE, related_name='admin_contacts')
    contact_name = models.CharField(max_length=255)
    designation = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    mobile_number = models.CharField(max_length=20)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.INACTIVE)
    verification_token = models.CharField(max_length=128, unique=True, null=True, blank=True)
    verification_token_expires = models.DateTimeField(null=True, blank=True)
    is_verified = models.BooleanField(default=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='port_admin_contacts'
    )

    class Meta:
        db_table = 'port_admin_contacts'
        verbose_name = 'Port Admin Contact'
        verbose_name_plural = 'Port Admin Contacts'
        ordering = ['contact_name']

    def __str__(self):
        return f"{self.contact_name} <{self.email}>"

    def issue_verification_token(self, now=None):
        """Generate a fresh token valid for PORT_CONTACT_TOKEN_HOURS."""
        now = now or timezone.now()
        self.verification_token = secrets.token_urlsafe(32)
        self.verification_token_expires = now + timedelta(hours=settings.PORT_CONTACT_TOKEN_HOURS)
        return self.verification_token

    def token_expired(self, now=None):
        if not self.verification_token_expires:
            return True
        return (now or timezone.now()) > self.verification_token_expires
