"""
Core Base Module

Provides shared base classes, mixins, and utilities for all portal apps.

Exports:
    Basic Utilities:
        - StatusChoices: Standard ACTIVE/INACTIVE status choices

    Individual Feature Mixins:
        - TimestampMixin: Adds created_at, updated_at
        - AuditMixin: Adds timestamps plus created_by, updated_by
        - ToggleActiveMixin: Adds is_active + toggle_status()
        - SoftDeleteMixin: Adds status + soft delete behavior

    Managers & QuerySets:
        - BaseQuerySet: filter_by_search_params / filter_by_active_param
        - SoftDeleteQuerySet: QuerySet with active()/inactive() filters
        - SoftDeleteManager: Manager for SoftDeleteMixin models

Usage Examples:

    from core.base import AuditMixin, ToggleActiveMixin
    from core.base.managers import BaseQuerySet

    class Port(ToggleActiveMixin, models.Model):
        port_name = models.CharField(max_length=255)
        objects = BaseQuerySet.as_manager()
"""

from core.base.models import (
    StatusChoices,
    TimestampMixin,
    AuditMixin,
    ToggleActiveMixin,
    SoftDeleteMixin,
)

from core.base.managers import (
    BaseQuerySet,
    SoftDeleteQuerySet,
    SoftDeleteManager,
)

__all__ = [
    # Basic Utilities
    'StatusChoices',

    # Individual Feature Mixins
    'TimestampMixin',
    'AuditMixin',
    'ToggleActiveMixin',
    'SoftDeleteMixin',

    # Managers & QuerySets
    'BaseQuerySet',
    'SoftDeleteQuerySet',
    'SoftDeleteManager',
]
