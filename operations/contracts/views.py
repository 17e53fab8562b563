"""
API Views for customers and contracts.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.roles.core_config import PermissionSections
from core.roles.decorators import require_permission
from portal_project.pagination import auto_paginate
from portal_project.response_formatter import validation_error_response
from .serializers import (
    CONTRACT_CHILD_SERIALIZERS,
    ContractDetailSerializer,
    ContractRenewSerializer,
    ContractSerializer,
    CustomerSerializer,
)
from .services import CONTRACT_CHILD_MODELS, ContractService, CustomerService

CONTRACTS = PermissionSections.CONTRACTS


def _forbidden(exc):
    return Response({'error': str(exc)}, status=status.HTTP_403_FORBIDDEN)


def _get_contract(request, pk):
    return get_object_or_404(ContractService.visible_contracts(request.user), pk=pk)


# ============================================================================
# Customer Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(CONTRACTS)
@auto_paginate
def customer_list(request):
    """
    List or create customers.

    GET /api/customers/
    - Filters: ?terminal=, ?status=active|inactive, ?search=

    POST /api/customers/
    - Request body: { "terminal", "customer_name", "display_name", "email", "pan", "gst", "country", "state" }
    - customer_code is generated from the year and the terminal short code
    """
    if request.method == 'GET':
        customers = CustomerService.list_customers(request.user, request.query_params)
        return Response(CustomerSerializer(customers, many=True).data)

    elif request.method == 'POST':
        serializer = CustomerSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            customer = CustomerService.create_customer(request.user, serializer.validated_data)
        except PermissionDenied as e:
            return _forbidden(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(CONTRACTS)
def customer_detail(request, pk):
    """
    Retrieve, update or delete a customer.
    A customer with contracts cannot be deleted; set status to inactive instead.
    """
    customer = get_object_or_404(CustomerService.visible_customers(request.user), pk=pk)

    if request.method == 'GET':
        return Response(CustomerSerializer(customer).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = CustomerSerializer(customer, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            customer = CustomerService.update_customer(request.user, customer, serializer.validated_data)
        except PermissionDenied as e:
            return _forbidden(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(CustomerSerializer(customer).data)

    elif request.method == 'DELETE':
        try:
            CustomerService.delete_customer(request.user, customer)
        except ValidationError as e:
            return validation_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@require_permission(CONTRACTS)
@auto_paginate
def customer_contracts(request, pk):
    """
    GET /api/customers/<id>/contracts/
    """
    customer = get_object_or_404(CustomerService.visible_customers(request.user), pk=pk)
    contracts = customer.contracts.select_related('customer', 'renewed_from')
    return Response(ContractSerializer(contracts, many=True).data)


# ============================================================================
# Contract Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(CONTRACTS)
@auto_paginate
def contract_list(request):
    """
    List or create contracts.

    GET /api/contracts/
    - Filters: ?customer=, ?terminal=, ?is_active=, ?expired=, ?search=

    POST /api/contracts/
    - Request body: { "customer", "contract_number", "contract_copy_url", "valid_from", "valid_to" }
    """
    if request.method == 'GET':
        contracts = ContractService.list_contracts(request.user, request.query_params)
        return Response(ContractSerializer(contracts, many=True).data)

    elif request.method == 'POST':
        serializer = ContractSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            contract = ContractService.create_contract(request.user, serializer.validated_data)
        except PermissionDenied as e:
            return _forbidden(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(ContractSerializer(contract).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(CONTRACTS)
def contract_detail(request, pk):
    """
    Retrieve (with tariffs, cargo details, storage charges and special
    conditions), update or delete a contract.
    """
    contract = _get_contract(request, pk)

    if request.method == 'GET':
        return Response(ContractDetailSerializer(contract).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = ContractSerializer(contract, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            contract = ContractService.update_contract(request.user, contract, serializer.validated_data)
        except PermissionDenied as e:
            return _forbidden(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(ContractSerializer(contract).data)

    elif request.method == 'DELETE':
        ContractService.delete_contract(request.user, contract)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@require_permission(CONTRACTS)
def contract_renew(request, pk):
    """
    Renew a contract. The new contract points back via renewed_from and the
    old one is deactivated.

    POST /api/contracts/<id>/renew/
    - Request body: { "contract_number", "valid_from", "valid_to", "contract_copy_url", "copy_terms" }
    """
    contract = _get_contract(request, pk)
    serializer = ContractRenewSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        renewed = ContractService.renew_contract(request.user, contract, serializer.to_dto())
    except ValidationError as e:
        return validation_error_response(e)

    return Response(ContractDetailSerializer(renewed).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'POST'])
@require_permission(CONTRACTS)
def contract_children(request, pk, kind):
    """
    GET/POST /api/contracts/<id>/tariffs/
    GET/POST /api/contracts/<id>/cargo-details/
    GET/POST /api/contracts/<id>/storage-charges/
    GET/POST /api/contracts/<id>/special-conditions/
    """
    if kind not in CONTRACT_CHILD_MODELS:
        raise Http404
    contract = _get_contract(request, pk)
    serializer_class = CONTRACT_CHILD_SERIALIZERS[kind]

    if request.method == 'GET':
        children = ContractService.list_children(contract, kind)
        return Response(serializer_class(children, many=True).data)

    elif request.method == 'POST':
        serializer = serializer_class(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            child = ContractService.add_child(request.user, contract, kind, serializer.validated_data)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(serializer_class(child).data, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@require_permission(CONTRACTS)
def contract_child_delete(request, pk, kind, child_id):
    """
    DELETE /api/contracts/<id>/<kind>/<child_id>/
    """
    if kind not in CONTRACT_CHILD_MODELS:
        raise Http404
    contract = _get_contract(request, pk)
    try:
        ContractService.delete_child(request.user, contract, kind, child_id)
    except CONTRACT_CHILD_MODELS[kind].DoesNotExist:
        raise Http404
    return Response(status=status.HTTP_204_NO_CONTENT)
