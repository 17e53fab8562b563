"""
Terminals, subscription types and the activation history.
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from core.base import AuditMixin
from core.base.managers import BaseQuerySet


class SubscriptionType(models.Model):
    """
    Length of a terminal subscription. Periods longer than one month require
    a work order at activation.
    """

    class Months(models.IntegerChoices):
        ONE_MONTH = 1, '1 Month'
        ONE_YEAR = 12, '12 Months'
        TWO_YEARS = 24, '24 Months'
        FOUR_YEARS = 48, '48 Months'

    name = models.CharField(max_length=100, unique=True)
    months = models.PositiveSmallIntegerField(choices=Months.choices, unique=True)

    class Meta:
        db_table = 'subscription_types'
        verbose_name = 'Subscription Type'
        verbose_name_plural = 'Subscription Types'
        ordering = ['months']

    def __str__(self):
        return self.name

    @property
    def requires_work_order(self):
        return self.months > 1

    def delete(self, *args, **kwargs):
        """
        Prevent deletion while terminals reference this subscription type.
        """
        if self.terminals.exists():
            raise ValidationError(
                f"Cannot delete subscription type '{self.name}' because it is used by "
                f"{self.terminals.count()} terminal(s)"
            )
        return super().delete(*args, **kwargs)


# Billing address fields and their shipping counterparts
BILLING_TO_SHIPPING = {
    'billing_address': 'shipping_address',
    'billing_city': 'shipping_city',
    'billing_pin_code': 'shipping_pin_code',
    'billing_phone': 'shipping_phone',
    'billing_fax': 'shipping_fax',
}


class Terminal(AuditMixin):
    """
    A terminal operating inside a port.

    New terminals wait in "Processing for activation" until a system admin
    activates them with a subscription.
    """

    class Status(models.TextChoices):
        PROCESSING = 'Processing for activation', 'Processing for activation'
        ACTIVE = 'Active', 'Active'
        SUSPENDED = 'Suspended', 'Suspended'

    port = models.ForeignKey('ports.Port', on_delete=models.PROTECT, related_name='terminals')
    terminal_name = models.CharField(max_length=255)
    short_code = models.CharField(max_length=6, unique=True)
    gst = models.CharField(max_length=15, blank=True, default='')
    pan = models.CharField(max_length=10, blank=True, default='')
    currency = models.CharField(max_length=3, default='INR')
    timezone = models.CharField(max_length=50, default='Asia/Kolkata')

    billing_address = models.TextField()
    billing_city = models.CharField(max_length=100)
    billing_pin_code = models.CharField(max_length=10)
    billing_phone = models.CharField(max_length=20, blank=True, default='')
    billing_fax = models.CharField(max_length=20, blank=True, default='')

    same_as_billing = models.BooleanField(default=False)
    shipping_address = models.TextField(blank=True, default='')
    shipping_city = models.CharField(max_length=100, blank=True, default='')
    shipping_pin_code = models.CharField(max_length=10, blank=True, default='')
    shipping_phone = models.CharField(max_length=20, blank=True, default='')
    shipping_fax = models.CharField(max_length=20, blank=True, default='')

    status = models.CharField(max_length=30, choices=Status.choices, default=Status.PROCESSING, db_index=True)
    is_active = models.BooleanField(default=False)
    subscription_type = models.ForeignKey(
        SubscriptionType,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='terminals'
    )
    activation_start_date = models.DateField(null=True, blank=True)
    activation_end_date = models.DateField(null=True, blank=True)
    work_order_no = models.CharField(max_length=100, blank=True, default='')
    work_order_date = models.DateField(null=True, blank=True)
    suspension_remarks = models.TextField(blank=True, default='')

    SEARCH_FIELDS = ('terminal_name', 'short_code', 'port__port_name')
    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'terminals'
        verbose_name = 'Terminal'
        verbose_name_plural = 'Terminals'
        ordering = ['terminal_name']

    def __str__(self):
        return f"{self.terminal_name} ({self.short_code})"

    def save(self, *args, **kwargs):
        if self.same_as_billing:
            for billing_field, shipping_field in BILLING_TO_SHIPPING.items():
                setattr(self, shipping_field, getattr(self, billing_field))
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """
        Prevent deletion while customers are registered at the terminal.
        """
        if self.customers.exists():
            raise ValidationError(
                f"Cannot delete terminal '{self.terminal_name}' because it has "
                f"{self.customers.count()} customer(s)"
            )
        return super().delete(*args, **kwargs)


class ActivationLog(models.Model):
    """
    History of a terminal's activation workflow (created, activated, suspended).
    """

    class Action(models.TextChoices):
        CREATED = 'created', 'Created'
        ACTIVATED = 'activated', 'Activated'
        SUSPENDED = 'suspended', 'Suspended'

    terminal = models.ForeignKey(Terminal, on_delete=models.CASCADE, related_name='activation_logs')
    action = models.CharField(max_length=20, choices=Action.choices)
    description = models.TextField(blank=True, default='')
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='terminal_activation_logs'
    )
    data = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'terminal_activation_logs'
        verbose_name = 'Activation Log'
        verbose_name_plural = 'Activation Logs'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.terminal_id} {self.action} at {self.created_at:%Y-%m-%d %H:%M}"
