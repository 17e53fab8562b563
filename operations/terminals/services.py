"""
Service layer for terminals and the activation workflow.

Activation flow:
    create_terminal()   -> status "Processing for activation", system admins notified
    activate_terminal() -> status "Active", subscription period stored, creator notified
    suspend_terminal()  -> status "Suspended", remarks stored, creator notified
"""
import logging

from dateutil.relativedelta import relativedelta
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction

from core.notifications.models import NotificationTypes
from core.notifications.services import NotificationService
from core.roles.core_config import UserTypes
from .dtos import TerminalActivationDTO, TerminalSuspensionDTO
from .models import ActivationLog, SubscriptionType, Terminal

logger = logging.getLogger(__name__)

MIN_SUSPENSION_REMARKS_LENGTH = 10


def visible_terminals(user, queryset=None):
    """
    Restrict a terminal queryset to what the user may see.

    System admins see everything, terminal users their assigned terminals,
    other users the terminals of their port.
    """
    if queryset is None:
        queryset = Terminal.objects.all()
    if user.is_system_admin():
        return queryset
    if user.user_type.type_name == UserTypes.TERMINAL_USER:
        return queryset.filter(pk__in=user.terminals.values('pk'))
    if user.port_id:
        return queryset.filter(port_id=user.port_id)
    return queryset.none()


def calculate_end_date(start_date, months):
    """Subscription end date, month-accurate (Jan 31 + 1 month = Feb 28/29)."""
    return start_date + relativedelta(months=months)


def log_activation_event(terminal, action, description, user=None, data=None):
    return ActivationLog.objects.create(
        terminal=terminal,
        action=action,
        description=description,
        performed_by=user,
        data=data,
    )


class TerminalService:

    @staticmethod
    def list_terminals(user, query_params):
        """
        Terminals visible to the user.

        Query Params:
        - port: port id
        - status: Processing for activation | Active | Suspended
        - is_active: true | false
        - search: terminal name, short code or port name
        """
        queryset = visible_terminals(
            user, Terminal.objects.select_related('port__organization', 'subscription_type')
        )

        port = query_params.get('port')
        if port and str(port).isdigit():
            queryset = queryset.filter(port_id=port)

        status = query_params.get('status')
        if status:
            queryset = queryset.filter(status=status)

        return (
            queryset
            .filter_by_active_param(query_params)
            .filter_by_search_params(query_params)
            .order_by('terminal_name')
        )

    @staticmethod
    def list_pending_activation(query_params):
        """
        Every terminal for the activation screen, newest first.

        Query Params:
        - status: restrict to one workflow status
        - search: terminal name, short code or port name
        """
        queryset = Terminal.objects.select_related('port__organization', 'subscription_type', 'created_by')

        status = query_params.get('status')
        if status:
            queryset = queryset.filter(status=status)

        return queryset.filter_by_search_params(query_params).order_by('-created_at', '-id')

    @staticmethod
    @transaction.atomic
    def create_terminal(user, data):
        """
        Create a terminal awaiting activation.

        Users other than system admins may only add terminals to their own port.
        """
        port = data['port']
        if not user.is_system_admin() and port.pk != user.port_id:
            raise PermissionDenied("You can only create terminals for your own port")

        terminal = Terminal(**data)
        terminal.status = Terminal.Status.PROCESSING
        terminal.is_active = False
        terminal.created_by = user
        terminal.updated_by = user
        terminal.full_clean()
        terminal.save()

        log_activation_event(
            terminal, ActivationLog.Action.CREATED,
            f"Terminal {terminal.terminal_name} created and submitted for activation",
            user=user,
        )

        NotificationService.notify_system_admins(
            NotificationTypes.TERMINAL_ACTIVATION_REQUEST,
            'Terminal activation request',
            f"Terminal {terminal.terminal_name} at {port.port_name} is waiting for activation",
            data={
                'terminal_id': terminal.id,
                'terminal_name': terminal.terminal_name,
                'port_name': port.port_name,
            },
        )
        logger.info("Terminal %s created at port %s by %s", terminal.short_code, port.display_name, user.email)
        return terminal

    @staticmethod
    @transaction.atomic
    def update_terminal(user, terminal, data):
        """
        Update terminal details. Workflow fields are changed only through
        activate_terminal / suspend_terminal.
        """
        port = data.get('port')
        if port is not None and port.pk != terminal.port_id and not user.is_system_admin():
            raise PermissionDenied("Only system administrators can move a terminal to another port")

        for key, value in data.items():
            setattr(terminal, key, value)
        terminal.updated_by = user
        terminal.full_clean()
        terminal.save()
        logger.info("Terminal %s updated by %s", terminal.short_code, user.email)
        return terminal

    @staticmethod
    def delete_terminal(user, terminal):
        """Raises ValidationError while customers are registered at the terminal."""
        code = terminal.short_code
        terminal.delete()
        logger.info("Terminal %s deleted by %s", code, user.email)


@transaction.atomic
def activate_terminal(user, terminal, start_date, subscription_type, work_order_no=None, work_order_date=None):
    """
    Activate a terminal for a subscription period.

    Args:
        user: Performing user
        terminal: Terminal to activate
        start_date: First day of the subscription
        subscription_type: SubscriptionType
        work_order_no / work_order_date: Required when the subscription is longer than one month

    Raises:
        ValidationError: terminal already active or work order missing
    """
    if terminal.status == Terminal.Status.ACTIVE:
        raise ValidationError("Terminal is already active")

    if subscription_type.requires_work_order:
        errors = {}
        if not work_order_no:
            errors['work_order_no'] = 'Work order number is required for subscriptions longer than 1 month'
        if not work_order_date:
            errors['work_order_date'] = 'Work order date is required for subscriptions longer than 1 month'
        if errors:
            raise ValidationError(errors)

    end_date = calculate_end_date(start_date, subscription_type.months)

    terminal.status = Terminal.Status.ACTIVE
    terminal.is_active = True
    terminal.subscription_type = subscription_type
    terminal.activation_start_date = start_date
    terminal.activation_end_date = end_date
    terminal.work_order_no = work_order_no or ''
    terminal.work_order_date = work_order_date
    terminal.suspension_remarks = ''
    terminal.updated_by = user
    terminal.save()

    log_activation_event(
        terminal, ActivationLog.Action.ACTIVATED,
        f"Terminal activated with {subscription_type.name} subscription",
        user=user,
        data={
            'subscription_type': subscription_type.name,
            'months': subscription_type.months,
            'start': start_date.isoformat(),
            'end': end_date.isoformat(),
            'work_order_no': work_order_no or None,
        },
    )

    NotificationService.safe_notify(
        terminal.created_by,
        NotificationTypes.TERMINAL_ACTIVATED,
        'Terminal activated',
        f"Terminal {terminal.terminal_name} is active until {end_date:%d %b %Y}",
        data={'terminal_id': terminal.id, 'terminal_name': terminal.terminal_name},
    )
    logger.info(
        "Terminal %s activated by %s (%s, %s to %s)",
        terminal.short_code, user.email, subscription_type.name, start_date, end_date
    )
    return terminal


@transaction.atomic
def suspend_terminal(user, terminal, remarks):
    """
    Suspend an Active terminal.

    Raises:
        ValidationError: remarks shorter than 10 characters or terminal not Active
    """
    remarks = (remarks or '').strip()
    if len(remarks) < MIN_SUSPENSION_REMARKS_LENGTH:
        raise ValidationError({
            'suspension_remarks': (
                f"Suspension remarks must be at least {MIN_SUSPENSION_REMARKS_LENGTH} characters long"
            )
        })

    if terminal.status != Terminal.Status.ACTIVE:
        raise ValidationError("Only active terminals can be suspended")

    terminal.status = Terminal.Status.SUSPENDED
    terminal.is_active = False
    terminal.suspension_remarks = remarks
    terminal.updated_by = user
    terminal.save()

    log_activation_event(
        terminal, ActivationLog.Action.SUSPENDED,
        f"Terminal suspended: {remarks}",
        user=user,
        data={'remarks': remarks},
    )

    NotificationService.safe_notify(
        terminal.created_by,
        NotificationTypes.TERMINAL_SUSPENDED,
        'Terminal suspended',
        f"Terminal {terminal.terminal_name} has been suspended: {remarks}",
        data={'terminal_id': terminal.id, 'terminal_name': terminal.terminal_name},
    )
    logger.info("Terminal %s suspended by %s", terminal.short_code, user.email)
    return terminal


class TerminalActivationService:
    """DTO entry points used by the activation views"""

    @staticmethod
    def activate(user, terminal, dto: TerminalActivationDTO) -> Terminal:
        try:
            subscription_type = SubscriptionType.objects.get(pk=dto.subscription_type_id)
        except SubscriptionType.DoesNotExist:
            raise ValidationError({'subscription_type_id': 'Subscription type not found'})

        return activate_terminal(
            user,
            terminal,
            dto.activation_start_date,
            subscription_type,
            work_order_no=dto.work_order_no,
            work_order_date=dto.work_order_date,
        )

    @staticmethod
    def suspend(user, terminal, dto: TerminalSuspensionDTO) -> Terminal:
        return suspend_terminal(user, terminal, dto.suspension_remarks)
