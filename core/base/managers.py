"""
Core Base Managers Module

Provides custom querysets and managers for the portal models.

Exports:
    QuerySets:
        - BaseQuerySet: filter_by_search_params, filter_by_active_param
        - SoftDeleteQuerySet: active(), inactive() on the status field

    Managers:
        - SoftDeleteManager: For SoftDeleteMixin models

Usage:
    class Port(ToggleActiveMixin, models.Model):
        SEARCH_FIELDS = ('port_name', 'display_name')
        objects = BaseQuerySet.as_manager()

    Port.objects.filter_by_search_params(request.query_params)
"""
from django.db import models
from django.db.models import Q

from core.base.models import StatusChoices

TRUE_VALUES = ('true', '1', 'yes')
FALSE_VALUES = ('false', '0', 'no')


class BaseQuerySet(models.QuerySet):
    """
    Base QuerySet with the list-endpoint filters shared by every app.
    """

    def filter_by_search_params(self, query_params, search_fields=None):
        """
        Apply a ?search= filter across the model's search fields.

        Args:
            query_params: QueryDict or dict with optional key 'search'
            search_fields: Field names to match with icontains. Defaults to
                the model's SEARCH_FIELDS attribute.

        Returns:
            Filtered QuerySet
        """
        queryset = self
        search = query_params.get('search')
        fields = search_fields or getattr(self.model, 'SEARCH_FIELDS', ())

        if search and fields:
            condition = Q()
            for field in fields:
                condition |= Q(**{f'{field}__icontains': search})
            queryset = queryset.filter(condition)

        return queryset

    def filter_by_active_param(self, query_params, param='is_active'):
        """Apply ?is_active=true|false when present; other values are ignored."""
        value = str(query_params.get(param, '')).lower()
        if value in TRUE_VALUES:
            return self.filter(is_active=True)
        if value in FALSE_VALUES:
            return self.filter(is_active=False)
        return self

    def active(self):
        return self.filter(is_active=True)


class SoftDeleteQuerySet(BaseQuerySet):
    """QuerySet for models with the SoftDeleteMixin status field."""

    def active(self):
        return self.filter(status=StatusChoices.ACTIVE)

    def inactive(self):
        return self.filter(status=StatusChoices.INACTIVE)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """
    Manager for SoftDeleteMixin models.

    Usage:
        class Customer(SoftDeleteMixin, models.Model):
            objects = SoftDeleteManager()

        Customer.objects.active()
    """
    pass
