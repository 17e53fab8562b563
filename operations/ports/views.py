"""
API Views for ports and port admin contacts.
"""
from django.core.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.roles.core_config import PermissionSections
from core.roles.decorators import require_permission
from operations.terminals.serializers import TerminalSerializer
from operations.terminals.utils import get_available_terminals_for_port
from portal_project.pagination import auto_paginate
from portal_project.response_formatter import validation_error_response
from .models import PortAdminContact
from .serializers import ContactVerificationSerializer, PortAdminContactSerializer, PortSerializer
from .services import PortAdminContactService, PortService

PORTS = PermissionSections.PORTS


def _get_port(request, pk):
    return get_object_or_404(PortService.list_ports(request.user, {}), pk=pk)


# ============================================================================
# Port Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(PORTS)
@auto_paginate
def port_list(request):
    """
    List ports visible to the user or create a new one.

    GET /api/ports/
    - Filters: ?organization=, ?is_active=, ?search=

    POST /api/ports/
    - Request body: { "port_name", "display_name", "organization", "address", "country", "state" }
    """
    if request.method == 'GET':
        ports = PortService.list_ports(request.user, request.query_params)
        return Response(PortSerializer(ports, many=True).data)

    elif request.method == 'POST':
        serializer = PortSerializer(data=request.data)
        if serializer.is_valid():
            try:
                port = PortService.create(request.user, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(PortSerializer(port).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(PORTS)
def port_detail(request, pk):
    """
    Retrieve, update or delete a port.
    A port that still has terminals cannot be deleted.
    """
    port = _get_port(request, pk)

    if request.method == 'GET':
        return Response(PortSerializer(port).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = PortSerializer(port, data=request.data, partial=partial)
        if serializer.is_valid():
            try:
                port = PortService.update(request.user, port, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(PortSerializer(port).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    elif request.method == 'DELETE':
        try:
            PortService.delete(request.user, port)
        except ValidationError as e:
            return validation_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH'])
@require_permission(PORTS)
def port_toggle_status(request, pk):
    """
    PATCH /api/ports/<id>/toggle-status/
    """
    port = _get_port(request, pk)
    PortService.toggle(request.user, port)
    return Response(PortSerializer(port).data)


@api_view(['GET'])
@require_permission(PORTS)
@auto_paginate
def port_terminals(request, pk):
    """
    GET /api/ports/<id>/terminals/ - every terminal of the port
    """
    port = _get_port(request, pk)
    terminals = port.terminals.select_related('port__organization', 'subscription_type').order_by('terminal_name')
    return Response(TerminalSerializer(terminals, many=True).data)


@api_view(['GET'])
@require_permission(PORTS)
def port_available_terminals(request, pk):
    """
    GET /api/ports/<id>/available-terminals/
    - Only terminals that are Active and inside their subscription period
    """
    port = _get_port(request, pk)
    terminals = get_available_terminals_for_port(port.id)
    return Response(TerminalSerializer(terminals, many=True).data)


# ============================================================================
# Port Admin Contact Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(PORTS)
@auto_paginate
def port_contacts(request, pk):
    """
    GET /api/ports/<id>/contacts/
    POST /api/ports/<id>/contacts/
    - Request body: { "contact_name", "designation", "email", "mobile_number" }
    - The contact starts inactive with a 24 hour verification token
    """
    port = _get_port(request, pk)

    if request.method == 'GET':
        contacts = port.admin_contacts.select_related('port').order_by('contact_name')
        return Response(PortAdminContactSerializer(contacts, many=True).data)

    elif request.method == 'POST':
        serializer = PortAdminContactSerializer(data=request.data)
        if serializer.is_valid():
            try:
                contact = PortAdminContactService.create(request.user, port, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(PortAdminContactSerializer(contact).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(PORTS)
def contact_detail(request, pk):
    """
    Retrieve, update or delete a port admin contact.
    """
    contact = get_object_or_404(
        PortAdminContact.objects.select_related('port'),
        pk=pk,
        port__in=PortService.list_ports(request.user, {}),
    )

    if request.method == 'GET':
        return Response(PortAdminContactSerializer(contact).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = PortAdminContactSerializer(contact, data=request.data, partial=partial)
        if serializer.is_valid():
            try:
                contact = PortAdminContactService.update(request.user, contact, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(PortAdminContactSerializer(contact).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    elif request.method == 'DELETE':
        contact.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@require_permission(PORTS)
def contact_resend_verification(request, pk):
    """
    POST /api/ports/contacts/<id>/resend-verification/ - issue a new 24 hour token
    """
    contact = get_object_or_404(
        PortAdminContact.objects.select_related('port'),
        pk=pk,
        port__in=PortService.list_ports(request.user, {}),
    )
    try:
        PortAdminContactService.resend_verification(request.user, contact)
    except ValidationError as e:
        return validation_error_response(e)
    return Response(PortAdminContactSerializer(contact).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def contact_verify(request):
    """
    Public endpoint opened from the verification link.

    POST /api/ports/contacts/verify/
    - Request body: { "token" }
    - 400 for an unknown or expired token
    """
    serializer = ContactVerificationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        contact = PortAdminContactService.verify(serializer.validated_data['token'])
    except ValidationError as e:
        return validation_error_response(e)

    return Response({
        'message': 'Contact verified successfully',
        'contact': PortAdminContactSerializer(contact).data,
    })
