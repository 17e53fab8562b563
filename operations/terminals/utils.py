"""
Helpers for deciding which terminals can be used for day-to-day operations.

A terminal is "active and subscribed" when it has a subscription type, its
status is Active and, when both activation dates are set, today falls inside
that period (both ends inclusive).
"""
from django.db.models import Q
from django.utils import timezone

from .models import Terminal


def _today(now=None):
    return timezone.localdate(now) if now is not None else timezone.localdate()


def is_active_and_subscribed(terminal, now=None):
    if not terminal.subscription_type_id:
        return False
    if terminal.status != Terminal.Status.ACTIVE:
        return False
    if terminal.activation_start_date and terminal.activation_end_date:
        today = _today(now)
        if not terminal.activation_start_date <= today <= terminal.activation_end_date:
            return False
    return True


def get_active_and_subscribed_terminals(queryset=None, now=None):
    """Database-side version of is_active_and_subscribed."""
    if queryset is None:
        queryset = Terminal.objects.all()
    today = _today(now)
    in_period = (
        Q(activation_start_date__isnull=True)
        | Q(activation_end_date__isnull=True)
        | Q(activation_start_date__lte=today, activation_end_date__gte=today)
    )
    return queryset.filter(
        in_period,
        subscription_type__isnull=False,
        status=Terminal.Status.ACTIVE,
    )


def get_available_terminals_for_port(port_id, now=None):
    queryset = Terminal.objects.filter(port_id=port_id).select_related('port__organization', 'subscription_type')
    return get_active_and_subscribed_terminals(queryset, now).order_by('terminal_name')


def format_terminal_display_name(terminal):
    return f"{terminal.terminal_name} ({terminal.short_code})"


def remaining_days(terminal, now=None):
    """Days left in the subscription of an Active terminal, never negative; None otherwise."""
    if terminal.status != Terminal.Status.ACTIVE or not terminal.activation_end_date:
        return None
    return max(0, (terminal.activation_end_date - _today(now)).days)
