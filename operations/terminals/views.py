"""
API Views for terminals, subscription types and the activation workflow.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.roles.core_config import PermissionLevels, PermissionSections
from core.roles.decorators import require_any_permission, require_permission
from portal_project.pagination import auto_paginate
from portal_project.response_formatter import success_response, validation_error_response
from .models import SubscriptionType, Terminal
from .serializers import (
    ActivationLogSerializer,
    SubscriptionTypeSerializer,
    TerminalActivationSerializer,
    TerminalSerializer,
    TerminalSuspensionSerializer,
)
from .services import TerminalActivationService, TerminalService, visible_terminals

TERMINALS = PermissionSections.TERMINALS
TERMINAL_ACTIVATION = PermissionSections.TERMINAL_ACTIVATION


def _get_terminal(request, pk):
    return get_object_or_404(visible_terminals(request.user, Terminal.objects.select_related(
        'port__organization', 'subscription_type', 'created_by'
    )), pk=pk)


# ============================================================================
# Terminal Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(TERMINALS)
@auto_paginate
def terminal_list(request):
    """
    List terminals visible to the user or register a new one.

    GET /api/terminals/
    - Filters: ?port=, ?status=, ?is_active=, ?search=

    POST /api/terminals/
    - New terminals start as "Processing for activation" and every system
      admin is notified
    """
    if request.method == 'GET':
        terminals = TerminalService.list_terminals(request.user, request.query_params)
        return Response(TerminalSerializer(terminals, many=True).data)

    elif request.method == 'POST':
        serializer = TerminalSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            terminal = TerminalService.create_terminal(request.user, serializer.validated_data)
        except PermissionDenied as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(TerminalSerializer(terminal).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(TERMINALS)
def terminal_detail(request, pk):
    """
    Retrieve, update or delete a terminal.
    A terminal with registered customers cannot be deleted.
    """
    terminal = _get_terminal(request, pk)

    if request.method == 'GET':
        return Response(TerminalSerializer(terminal).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = TerminalSerializer(terminal, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            terminal = TerminalService.update_terminal(request.user, terminal, serializer.validated_data)
        except PermissionDenied as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(TerminalSerializer(terminal).data)

    elif request.method == 'DELETE':
        try:
            TerminalService.delete_terminal(request.user, terminal)
        except ValidationError as e:
            return validation_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Activation Workflow Views
# ============================================================================

@api_view(['GET'])
@require_permission(TERMINAL_ACTIVATION, level=PermissionLevels.READ)
@auto_paginate
def terminal_pending_activation(request):
    """
    GET /api/terminals/pending-activation/
    - Every terminal with nested port and organization, newest first
    - Filters: ?status=, ?search=
    """
    terminals = TerminalService.list_pending_activation(request.query_params)
    return Response(TerminalSerializer(terminals, many=True).data)


@api_view(['PUT'])
@require_permission(TERMINAL_ACTIVATION, level=PermissionLevels.MANAGE)
def terminal_activate(request, pk):
    """
    Activate a terminal for a subscription period.

    PUT /api/terminals/<id>/activate/
    - Request body: {
        "activation_start_date": "2025-01-01",
        "subscription_type_id": 2,
        "work_order_no": "WO-1",        (required above 1 month)
        "work_order_date": "2024-12-20" (required above 1 month)
      }
    """
    terminal = get_object_or_404(Terminal.objects.select_related('created_by'), pk=pk)
    serializer = TerminalActivationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        terminal = TerminalActivationService.activate(request.user, terminal, serializer.to_dto())
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        data=TerminalSerializer(terminal).data,
        message="Terminal activated successfully",
    )


@api_view(['PUT'])
@require_permission(TERMINAL_ACTIVATION, level=PermissionLevels.MANAGE)
def terminal_suspend(request, pk):
    """
    Suspend an Active terminal.

    PUT /api/terminals/<id>/suspend/
    - Request body: { "suspension_remarks": "..." } (at least 10 characters)
    """
    terminal = get_object_or_404(Terminal.objects.select_related('created_by'), pk=pk)
    serializer = TerminalSuspensionSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        terminal = TerminalActivationService.suspend(request.user, terminal, serializer.to_dto())
    except ValidationError as e:
        return validation_error_response(e)

    return success_response(
        data=TerminalSerializer(terminal).data,
        message="Terminal suspended successfully",
    )


@api_view(['GET'])
@require_any_permission(
    (TERMINALS, None, PermissionLevels.READ),
    (TERMINAL_ACTIVATION, None, PermissionLevels.READ),
)
def terminal_activation_log(request, pk):
    """
    GET /api/terminals/<id>/activation-log/ - oldest first
    """
    if request.user.is_system_admin():
        terminal = get_object_or_404(Terminal, pk=pk)
    else:
        terminal = _get_terminal(request, pk)
    logs = terminal.activation_logs.select_related('performed_by')
    return Response(ActivationLogSerializer(logs, many=True).data)


# ============================================================================
# Subscription Type Views
# ============================================================================

@api_view(['GET'])
@require_any_permission(
    (TERMINALS, None, PermissionLevels.READ),
    (TERMINAL_ACTIVATION, None, PermissionLevels.READ),
)
def subscription_type_list(request):
    """
    GET /api/subscription-types/ - ordered by length
    """
    subscription_types = SubscriptionType.objects.all()
    return Response(SubscriptionTypeSerializer(subscription_types, many=True).data)
