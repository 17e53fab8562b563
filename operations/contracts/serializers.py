from rest_framework import serializers

from .dtos import ContractRenewalDTO
from .models import (
    Contract,
    ContractCargoDetail,
    ContractSpecialCondition,
    ContractStorageCharge,
    ContractTariff,
    Customer,
)


class CustomerSerializer(serializers.ModelSerializer):
    terminal_name = serializers.CharField(source='terminal.terminal_name', read_only=True)
    contract_count = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            'id', 'terminal', 'terminal_name', 'customer_code', 'customer_name', 'display_name',
            'email', 'pan', 'gst', 'country', 'state', 'status', 'contract_count',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'terminal_name', 'customer_code', 'contract_count', 'created_at', 'updated_at']

    def get_contract_count(self, obj):
        return obj.contracts.count()

    def validate_email(self, value):
        return value.lower()

    def validate_pan(self, value):
        return value.strip().upper()

    def validate_gst(self, value):
        return value.strip().upper()


# ============================================================================
# Contract children
# ============================================================================

class ContractTariffSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContractTariff
        fields = [
            'id', 'contract', 'service',
            'chc_rate_to_customer', 'chc_rate_to_port', 'bhc_rate_to_customer', 'bhc_rate_to_port',
            'created_at',
        ]
        read_only_fields = ['id', 'contract', 'created_at']


class ContractCargoDetailSerializer(serializers.ModelSerializer):
    assigned_plots = serializers.ListField(child=serializers.CharField(), required=False)

    class Meta:
        model = ContractCargoDetail
        fields = ['id', 'contract', 'cargo_type', 'expected_cargo_per_year', 'assigned_plots', 'created_at']
        read_only_fields = ['id', 'contract', 'created_at']


class ContractStorageChargeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContractStorageCharge
        fields = [
            'id', 'contract', 'storage_free_time', 'charge_per_day', 'charge_applicable_days', 'created_at',
        ]
        read_only_fields = ['id', 'contract', 'created_at']


class ContractSpecialConditionSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContractSpecialCondition
        fields = ['id', 'contract', 'condition', 'created_at']
        read_only_fields = ['id', 'contract', 'created_at']


# URL segment -> serializer
CONTRACT_CHILD_SERIALIZERS = {
    'tariffs': ContractTariffSerializer,
    'cargo-details': ContractCargoDetailSerializer,
    'storage-charges': ContractStorageChargeSerializer,
    'special-conditions': ContractSpecialConditionSerializer,
}


# ============================================================================
# Contracts
# ============================================================================

class ContractSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source='customer.customer_name', read_only=True)
    customer_code = serializers.CharField(source='customer.customer_code', read_only=True)
    renewed_from_number = serializers.CharField(source='renewed_from.contract_number', read_only=True, default=None)
    is_expired = serializers.BooleanField(read_only=True)
    status = serializers.CharField(source='status_label', read_only=True)

    class Meta:
        model = Contract
        fields = [
            'id', 'customer', 'customer_name', 'customer_code', 'contract_number', 'contract_copy_url',
            'valid_from', 'valid_to', 'renewed_from', 'renewed_from_number', 'is_active', 'is_expired',
            'status', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'renewed_from', 'created_by', 'created_at', 'updated_at']

    def validate(self, attrs):
        valid_from = attrs.get('valid_from', getattr(self.instance, 'valid_from', None))
        valid_to = attrs.get('valid_to', getattr(self.instance, 'valid_to', None))
        if valid_from and valid_to and valid_to <= valid_from:
            raise serializers.ValidationError({'valid_to': 'End date must be after start date'})
        return attrs


class ContractDetailSerializer(ContractSerializer):
    """Contract with every child section nested"""
    tariffs = ContractTariffSerializer(many=True, read_only=True)
    cargo_details = ContractCargoDetailSerializer(many=True, read_only=True)
    storage_charges = ContractStorageChargeSerializer(many=True, read_only=True)
    special_conditions = ContractSpecialConditionSerializer(many=True, read_only=True)

    class Meta(ContractSerializer.Meta):
        fields = ContractSerializer.Meta.fields + [
            'tariffs', 'cargo_details', 'storage_charges', 'special_conditions',
        ]


class ContractRenewSerializer(serializers.Serializer):
    """POST /api/contracts/<id>/renew/"""
    contract_number = serializers.CharField(max_length=100)
    valid_from = serializers.DateField()
    valid_to = serializers.DateField()
    contract_copy_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    copy_terms = serializers.BooleanField(required=False, default=True)

    def validate_contract_number(self, value):
        if Contract.objects.filter(contract_number=value).exists():
            raise serializers.ValidationError("A contract with this number already exists")
        return value

    def validate(self, attrs):
        if attrs['valid_to'] <= attrs['valid_from']:
            raise serializers.ValidationError({'valid_to': 'End date must be after start date'})
        return attrs

    def to_dto(self) -> ContractRenewalDTO:
        return ContractRenewalDTO(**self.validated_data)
