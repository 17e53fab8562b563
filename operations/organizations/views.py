"""
API Views for organizations.
"""
from django.core.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.roles.core_config import PermissionSections
from core.roles.decorators import require_permission
from portal_project.pagination import auto_paginate
from portal_project.response_formatter import validation_error_response
from .models import Organization
from .serializers import OrganizationSerializer
from .services import OrganizationService

ORGANIZATIONS = PermissionSections.ORGANIZATIONS


@api_view(['GET', 'POST'])
@require_permission(ORGANIZATIONS)
@auto_paginate
def organization_list(request):
    """
    List all organizations or create a new one.

    GET /api/organizations/
    - Filters: ?search=, ?is_active=

    POST /api/organizations/
    - Request body: { "organization_name", "display_name", "organization_code",
      "register_office", "country", ... }
    """
    if request.method == 'GET':
        organizations = OrganizationService.list_organizations(request.query_params)
        return Response(OrganizationSerializer(organizations, many=True).data)

    elif request.method == 'POST':
        serializer = OrganizationSerializer(data=request.data)
        if serializer.is_valid():
            try:
                organization = OrganizationService.create(request.user, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(OrganizationSerializer(organization).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(ORGANIZATIONS)
def organization_detail(request, pk):
    """
    Retrieve, update or delete an organization.
    An organization that still has ports cannot be deleted.
    """
    organization = get_object_or_404(Organization, pk=pk)

    if request.method == 'GET':
        return Response(OrganizationSerializer(organization).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = OrganizationSerializer(organization, data=request.data, partial=partial)
        if serializer.is_valid():
            try:
                organization = OrganizationService.update(request.user, organization, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(OrganizationSerializer(organization).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    elif request.method == 'DELETE':
        try:
            OrganizationService.delete(request.user, organization)
        except ValidationError as e:
            return validation_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH'])
@require_permission(ORGANIZATIONS)
def organization_toggle_status(request, pk):
    """
    PATCH /api/organizations/<id>/toggle-status/
    """
    organization = get_object_or_404(Organization, pk=pk)
    OrganizationService.toggle(request.user, organization)
    return Response(OrganizationSerializer(organization).data)


@api_view(['GET'])
@require_permission(ORGANIZATIONS)
@auto_paginate
def organization_ports(request, pk):
    """
    GET /api/organizations/<id>/ports/
    """
    from operations.ports.serializers import PortSerializer

    organization = get_object_or_404(Organization, pk=pk)
    ports = organization.ports.select_related('organization').order_by('port_name')
    return Response(PortSerializer(ports, many=True).data)
