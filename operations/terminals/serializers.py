from rest_framework import serializers

from operations.ports.serializers import PortSummarySerializer
from .dtos import TerminalActivationDTO, TerminalSuspensionDTO
from .models import ActivationLog, SubscriptionType, Terminal
from .services import MIN_SUSPENSION_REMARKS_LENGTH
from .utils import format_terminal_display_name, is_active_and_subscribed, remaining_days


class SubscriptionTypeSerializer(serializers.ModelSerializer):
    requires_work_order = serializers.BooleanField(read_only=True)

    class Meta:
        model = SubscriptionType
        fields = ['id', 'name', 'months', 'requires_work_order']
        read_only_fields = ['id', 'requires_work_order']


class TerminalSerializer(serializers.ModelSerializer):
    """
    Terminal payload. `port` is written as an id and read back as a nested
    summary with its organization.
    """
    port_detail = PortSummarySerializer(source='port', read_only=True)
    subscription_type_name = serializers.CharField(source='subscription_type.name', read_only=True, default=None)
    display_name = serializers.SerializerMethodField()
    remaining_days = serializers.SerializerMethodField()
    is_subscribed = serializers.SerializerMethodField()
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)

    class Meta:
        model = Terminal
        fields = [
            'id', 'port', 'port_detail', 'terminal_name', 'short_code', 'display_name',
            'gst', 'pan', 'currency', 'timezone',
            'billing_address', 'billing_city', 'billing_pin_code', 'billing_phone', 'billing_fax',
            'same_as_billing',
            'shipping_address', 'shipping_city', 'shipping_pin_code', 'shipping_phone', 'shipping_fax',
            'status', 'is_active', 'subscription_type', 'subscription_type_name',
            'activation_start_date', 'activation_end_date', 'work_order_no', 'work_order_date',
            'suspension_remarks', 'remaining_days', 'is_subscribed',
            'created_by', 'created_by_email', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'status', 'is_active', 'subscription_type',
            'activation_start_date', 'activation_end_date', 'work_order_no', 'work_order_date',
            'suspension_remarks', 'created_by', 'created_at', 'updated_at',
        ]

    def get_display_name(self, obj):
        return format_terminal_display_name(obj)

    def get_remaining_days(self, obj):
        return remaining_days(obj)

    def get_is_subscribed(self, obj):
        return is_active_and_subscribed(obj)

    def validate_short_code(self, value):
        return value.strip().upper()

    def validate(self, attrs):
        same_as_billing = attrs.get('same_as_billing', getattr(self.instance, 'same_as_billing', False))
        if not same_as_billing:
            missing = {}
            for field in ('shipping_address', 'shipping_city', 'shipping_pin_code'):
                value = attrs.get(field, getattr(self.instance, field, ''))
                if not value:
                    missing[field] = 'This field is required when shipping differs from billing'
            if missing:
                raise serializers.ValidationError(missing)
        return attrs


class TerminalActivationSerializer(serializers.Serializer):
    """PUT /api/terminals/<id>/activate/"""
    activation_start_date = serializers.DateField()
    subscription_type_id = serializers.IntegerField()
    work_order_no = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    work_order_date = serializers.DateField(required=False, allow_null=True)

    def validate_subscription_type_id(self, value):
        if not SubscriptionType.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Subscription type not found")
        return value

    def to_dto(self) -> TerminalActivationDTO:
        data = self.validated_data.copy()
        if data.get('work_order_no'):
            data['work_order_no'] = data['work_order_no'].strip()
        return TerminalActivationDTO(**data)


class TerminalSuspensionSerializer(serializers.Serializer):
    """PUT /api/terminals/<id>/suspend/"""
    suspension_remarks = serializers.CharField()

    def validate_suspension_remarks(self, value):
        value = value.strip()
        if len(value) < MIN_SUSPENSION_REMARKS_LENGTH:
            raise serializers.ValidationError(
                f"Suspension remarks must be at least {MIN_SUSPENSION_REMARKS_LENGTH} characters long"
            )
        return value

    def to_dto(self) -> TerminalSuspensionDTO:
        return TerminalSuspensionDTO(**self.validated_data)


class ActivationLogSerializer(serializers.ModelSerializer):
    performed_by_name = serializers.SerializerMethodField()
    performed_by_email = serializers.EmailField(source='performed_by.email', read_only=True, default=None)

    class Meta:
        model = ActivationLog
        fields = [
            'id', 'terminal', 'action', 'description', 'performed_by',
            'performed_by_name', 'performed_by_email', 'data', 'created_at',
        ]
        read_only_fields = fields

    def get_performed_by_name(self, obj):
        return obj.performed_by.full_name if obj.performed_by else None
