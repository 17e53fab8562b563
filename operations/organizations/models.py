from django.core.exceptions import ValidationError
from django.db import models

from core.base import TimestampMixin, ToggleActiveMixin
from core.base.managers import BaseQuerySet


class Organization(ToggleActiveMixin, TimestampMixin):
    """
    Port operating company. Owns one or more ports.
    """
    organization_name = models.CharField(max_length=255, unique=True)
    display_name = models.CharField(max_length=255, unique=True)
    organization_code = models.CharField(max_length=50, unique=True, db_index=True)
    register_office = models.TextField()
    country = models.CharField(max_length=100)
    telephone = models.CharField(max_length=30, blank=True, default='')
    fax = models.CharField(max_length=30, blank=True, default='')
    website = models.URLField(blank=True, default='')
    logo_url = models.CharField(max_length=500, blank=True, default='')

    SEARCH_FIELDS = ('organization_name', 'display_name', 'organization_code')
    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'organizations'
        verbose_name = 'Organization'
        verbose_name_plural = 'Organizations'
        ordering = ['organization_name']

    def __str__(self):
        return f"{self.organization_name} ({self.organization_code})"

    def delete(self, *args, **kwargs):
        """
        Prevent deletion while ports still belong to the organization.
        """
        if self.ports.exists():
            raise ValidationError(
                f"Cannot delete organization '{self.organization_name}' because it has "
                f"{self.ports.count()} port(s)"
            )
        return super().delete(*args, **kwargs)
