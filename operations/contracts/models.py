"""
Customers registered at a terminal and their contracts.

A contract carries four kinds of child rows: tariffs, cargo details,
storage charges and special conditions.
"""
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from core.base import AuditMixin, SoftDeleteMixin, TimestampMixin
from core.base.managers import BaseQuerySet, SoftDeleteManager


class Customer(SoftDeleteMixin, TimestampMixin):
    """
    A customer of a terminal. customer_code is generated as
    <year>_<terminal short code>_<counter>, e.g. 2025_JSWT1_001.
    """
    terminal = models.ForeignKey('terminals.Terminal', on_delete=models.PROTECT, related_name='customers')
    customer_code = models.CharField(max_length=50, unique=True)
    customer_name = models.CharField(max_length=255)
    display_name = models.CharField(max_length=255)
    email = models.EmailField()
    pan = models.CharField(max_length=10, blank=True, default='')
    gst = models.CharField(max_length=15, blank=True, default='')
    country = models.CharField(max_length=100)
    state = models.CharField(max_length=100)

    SEARCH_FIELDS = ('customer_name', 'display_name', 'customer_code', 'email')
    objects = SoftDeleteManager()

    class Meta:
        db_table = 'customers'
        verbose_name = 'Customer'
        verbose_name_plural = 'Customers'
        ordering = ['customer_name']

    def __str__(self):
        return f"{self.customer_name} ({self.customer_code})"

    def delete(self, *args, **kwargs):
        """
        Prevent deletion while the customer has contracts. Deactivate instead.
        """
        if self.contracts.exists():
            raise ValidationError(
                f"Cannot delete customer '{self.customer_name}' because it has "
                f"{self.contracts.count()} contract(s). Set the customer inactive instead."
            )
        return super().delete(*args, **kwargs)


class Contract(AuditMixin):
    """
    A customer contract valid from valid_from to valid_to.

    Renewing a contract creates a new one pointing back through
    renewed_from and deactivates the old one.
    """
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name='contracts')
    contract_number = models.CharField(max_length=100, unique=True)
    contract_copy_url = models.URLField(max_length=500, blank=True, default='')
    valid_from = models.DateField()
    valid_to = models.DateField()
    renewed_from = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='renewals'
    )
    is_active = models.BooleanField(default=True)

    SEARCH_FIELDS = ('contract_number', 'customer__customer_name', 'customer__customer_code')
    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'contracts'
        verbose_name = 'Contract'
        verbose_name_plural = 'Contracts'
        ordering = ['-valid_from', '-id']

    def __str__(self):
        return self.contract_number

    def clean(self):
        super().clean()
        if self.valid_from and self.valid_to and self.valid_to <= self.valid_from:
            raise ValidationError({'valid_to': 'End date must be after start date'})

    @property
    def is_expired(self):
        return self.valid_to < timezone.localdate()

    @property
    def status_label(self):
        if not self.is_active:
            return 'Inactive'
        if self.is_expired:
            return 'Expired'
        return 'Active'


class ContractTariff(TimestampMixin):
    contract = models.ForeignKey(Contract, on_delete=models.CASCADE, related_name='tariffs')
    service = models.CharField(max_length=255)
    chc_rate_to_customer = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    chc_rate_to_port = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    bhc_rate_to_customer = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    bhc_rate_to_port = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    class Meta:
        db_table = 'contract_tariffs'
        ordering = ['id']

    def __str__(self):
        return f"{self.contract_id} - {self.service}"


class ContractCargoDetail(TimestampMixin):
    contract = models.ForeignKey(Contract, on_delete=models.CASCADE, related_name='cargo_details')
    cargo_type = models.CharField(max_length=255)
    expected_cargo_per_year = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=0,
        help_text="Expected volume in metric tonnes"
    )
    assigned_plots = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'contract_cargo_details'
        ordering = ['id']

    def __str__(self):
        return f"{self.contract_id} - {self.cargo_type}"


class ContractStorageCharge(TimestampMixin):
    contract = models.ForeignKey(Contract, on_delete=models.CASCADE, related_name='storage_charges')
    storage_free_time = models.PositiveIntegerField(help_text="Free storage in days")
    charge_per_day = models.DecimalField(max_digits=12, decimal_places=2)
    charge_applicable_days = models.PositiveIntegerField()

    class Meta:
        db_table = 'contract_storage_charges'
        ordering = ['id']

    def __str__(self):
        return f"{self.contract_id} - {self.storage_free_time} free days"


class ContractSpecialCondition(TimestampMixin):
    contract = models.ForeignKey(Contract, on_delete=models.CASCADE, related_name='special_conditions')
    condition = models.TextField()

    class Meta:
        db_table = 'contract_special_conditions'
        ordering = ['id']

    def __str__(self):
        return f"{self.contract_id} - {self.condition[:40]}"
