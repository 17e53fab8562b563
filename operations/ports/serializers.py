from rest_framework import serializers
from .models import Port, PortAdminContact


class PortSerializer(serializers.ModelSerializer):
    organization_name = serializers.CharField(source='organization.organization_name', read_only=True)
    terminal_count = serializers.SerializerMethodField()

    class Meta:
        model = Port
        fields = [
            'id', 'port_name', 'display_name', 'organization', 'organization_name',
            'address', 'country', 'state', 'is_active', 'terminal_count',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'organization_name', 'terminal_count', 'created_at', 'updated_at']

    def get_terminal_count(self, obj):
        return obj.terminals.count()

    def validate_display_name(self, value):
        return value.strip().upper()


class PortSummarySerializer(serializers.ModelSerializer):
    """Compact port representation nested in terminal payloads"""
    organization = serializers.SerializerMethodField()

    class Meta:
        model = Port
        fields = ['id', 'port_name', 'display_name', 'organization']

    def get_organization(self, obj):
        return {
            'id': obj.organization_id,
            'organization_name': obj.organization.organization_name,
            'display_name': obj.organization.display_name,
        }


class PortAdminContactSerializer(serializers.ModelSerializer):
    port_name = serializers.CharField(source='port.port_name', read_only=True)

    class Meta:
        model = PortAdminContact
        fields = [
            'id', 'port', 'port_name', 'contact_name', 'designation', 'email', 'mobile_number',
            'status', 'is_verified', 'verification_token_expires', 'user',
            'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'port', 'port_name', 'status', 'is_verified', 'verification_token_expires',
            'user', 'created_at', 'updated_at',
        ]

    def validate_email(self, value):
        return value.lower()


class ContactVerificationSerializer(serializers.Serializer):
    token = serializers.CharField()
