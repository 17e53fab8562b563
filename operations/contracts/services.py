"""
Service layer for customers and contracts.

Customers and contracts are visible to a user through the terminals the
user can see (see operations.terminals.services.visible_terminals).
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.utils import timezone

from operations.terminals.services import visible_terminals
from .dtos import ContractRenewalDTO
from .models import (
    Contract,
    ContractCargoDetail,
    ContractSpecialCondition,
    ContractStorageCharge,
    ContractTariff,
    Customer,
)

logger = logging.getLogger(__name__)

# URL segment -> child model
CONTRACT_CHILD_MODELS = {
    'tariffs': ContractTariff,
    'cargo-details': ContractCargoDetail,
    'storage-charges': ContractStorageCharge,
    'special-conditions': ContractSpecialCondition,
}

CHILD_COPY_EXCLUDE = ('id', 'contract', 'created_at', 'updated_at')


def _ensure_terminal_visible(user, terminal):
    if not visible_terminals(user).filter(pk=terminal.pk).exists():
        raise PermissionDenied("You do not have access to this terminal")


class CustomerService:

    @staticmethod
    def visible_customers(user):
        return Customer.objects.select_related('terminal__port').filter(
            terminal__in=visible_terminals(user)
        )

    @staticmethod
    def list_customers(user, query_params):
        """
        Customers of the terminals visible to the user.

        Query Params:
        - terminal: terminal id
        - status: active | inactive
        - search: name, display name, code or email
        """
        queryset = CustomerService.visible_customers(user)

        terminal = query_params.get('terminal')
        if terminal and str(terminal).isdigit():
            queryset = queryset.filter(terminal_id=terminal)

        status = query_params.get('status')
        if status:
            queryset = queryset.filter(status=status)

        return queryset.filter_by_search_params(query_params).order_by('customer_name')

    @staticmethod
    def generate_customer_code(terminal, year=None):
        """
        Next free code for the terminal in the given year: 2025_JSWT1_001, 2025_JSWT1_002, ...
        """
        year = year or timezone.localdate().year
        prefix = f"{year}_{terminal.short_code}_"
        counter = Customer.objects.filter(terminal=terminal, customer_code__startswith=prefix).count() + 1
        code = f"{prefix}{counter:03d}"
        while Customer.objects.filter(customer_code=code).exists():
            counter += 1
            code = f"{prefix}{counter:03d}"
        return code

    @staticmethod
    @transaction.atomic
    def create_customer(user, data):
        """
        Raises:
            PermissionDenied: terminal not visible to the user
        """
        terminal = data['terminal']
        _ensure_terminal_visible(user, terminal)

        customer = Customer(**data)
        customer.customer_code = CustomerService.generate_customer_code(terminal)
        customer.full_clean()
        customer.save()
        logger.info("Customer %s created by %s", customer.customer_code, user.email)
        return customer

    @staticmethod
    @transaction.atomic
    def update_customer(user, customer, data):
        terminal = data.get('terminal')
        if terminal is not None and terminal.pk != customer.terminal_id:
            _ensure_terminal_visible(user, terminal)
        customer.update_fields(data)
        logger.info("Customer %s updated by %s", customer.customer_code, user.email)
        return customer

    @staticmethod
    def delete_customer(user, customer):
        """Raises ValidationError while the customer has contracts."""
        code = customer.customer_code
        customer.delete()
        logger.info("Customer %s deleted by %s", code, user.email)


class ContractService:

    @staticmethod
    def visible_contracts(user):
        return Contract.objects.select_related('customer__terminal', 'renewed_from', 'created_by').filter(
            customer__terminal__in=visible_terminals(user)
        )

    @staticmethod
    def list_contracts(user, query_params):
        """
        Contracts of the customers visible to the user.

        Query Params:
        - customer: customer id
        - terminal: terminal id
        - is_active: true | false
        - expired: true | false
        - search: contract number, customer name or code
        """
        queryset = ContractService.visible_contracts(user)

        customer = query_params.get('customer')
        if customer and str(customer).isdigit():
            queryset = queryset.filter(customer_id=customer)

        terminal = query_params.get('terminal')
        if terminal and str(terminal).isdigit():
            queryset = queryset.filter(customer__terminal_id=terminal)

        expired = str(query_params.get('expired', '')).lower()
        today = timezone.localdate()
        if expired == 'true':
            queryset = queryset.filter(valid_to__lt=today)
        elif expired == 'false':
            queryset = queryset.filter(valid_to__gte=today)

        return queryset.filter_by_active_param(query_params).filter_by_search_params(query_params)

    @staticmethod
    @transaction.atomic
    def create_contract(user, data):
        """
        Raises:
            PermissionDenied: customer not visible to the user
            ValidationError: valid_to not after valid_from
        """
        customer = data['customer']
        _ensure_terminal_visible(user, customer.terminal)

        contract = Contract(**data)
        contract.created_by = user
        contract.updated_by = user
        contract.full_clean()
        contract.save()
        logger.info("Contract %s created for %s by %s", contract.contract_number, customer.customer_code, user.email)
        return contract

    @staticmethod
    @transaction.atomic
    def update_contract(user, contract, data):
        customer = data.get('customer')
        if customer is not None and customer.pk != contract.customer_id:
            _ensure_terminal_visible(user, customer.terminal)

        for key, value in data.items():
            setattr(contract, key, value)
        contract.updated_by = user
        contract.full_clean()
        contract.save()
        logger.info("Contract %s updated by %s", contract.contract_number, user.email)
        return contract

    @staticmethod
    def delete_contract(user, contract):
        number = contract.contract_number
        contract.delete()
        logger.info("Contract %s deleted by %s", number, user.email)

    @staticmethod
    @transaction.atomic
    def renew_contract(user, contract, dto: ContractRenewalDTO) -> Contract:
        """
        Create the follow-up contract and deactivate the current one.

        With copy_terms the tariffs, cargo details, storage charges and
        special conditions are copied to the new contract.

        Raises:
            ValidationError: contract already inactive or dates invalid
        """
        if not contract.is_active:
            raise ValidationError("Only active contracts can be renewed")

        renewed = Contract(
            customer=contract.customer,
            contract_number=dto.contract_number,
            contract_copy_url=dto.contract_copy_url or '',
            valid_from=dto.valid_from,
            valid_to=dto.valid_to,
            renewed_from=contract,
            is_active=True,
            created_by=user,
            updated_by=user,
        )
        renewed.full_clean()
        renewed.save()

        if dto.copy_terms:
            for model in CONTRACT_CHILD_MODELS.values():
                ContractService._copy_children(model, contract, renewed)

        contract.is_active = False
        contract.updated_by = user
        contract.save(update_fields=['is_active', 'updated_by', 'updated_at'])

        logger.info(
            "Contract %s renewed as %s by %s", contract.contract_number, renewed.contract_number, user.email
        )
        return renewed

    @staticmethod
    def _copy_children(model, source, target):
        field_names = [
            f.name for f in model._meta.concrete_fields if f.name not in CHILD_COPY_EXCLUDE
        ]
        model.objects.bulk_create([
            model(contract=target, **{name: getattr(row, name) for name in field_names})
            for row in model.objects.filter(contract=source)
        ])

    # ------------------------------------------------------------------
    # Child rows
    # ------------------------------------------------------------------

    @staticmethod
    def get_child_model(kind):
        """Child model for a URL segment; ValidationError for unknown kinds."""
        try:
            return CONTRACT_CHILD_MODELS[kind]
        except KeyError:
            raise ValidationError(f"Unknown contract section '{kind}'")

    @staticmethod
    def list_children(contract, kind):
        model = ContractService.get_child_model(kind)
        return model.objects.filter(contract=contract)

    @staticmethod
    def add_child(user, contract, kind, data):
        model = ContractService.get_child_model(kind)
        child = model(contract=contract, **data)
        child.full_clean()
        child.save()
        logger.info("Added %s row to contract %s by %s", kind, contract.contract_number, user.email)
        return child

    @staticmethod
    def delete_child(user, contract, kind, child_id):
        """Raises model.DoesNotExist when the row does not belong to the contract."""
        model = ContractService.get_child_model(kind)
        child = model.objects.get(pk=child_id, contract=contract)
        child.delete()
        logger.info("Deleted %s row %s of contract %s by %s", kind, child_id, contract.contract_number, user.email)
