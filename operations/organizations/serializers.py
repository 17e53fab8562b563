from rest_framework import serializers
from .models import Organization


class OrganizationSerializer(serializers.ModelSerializer):
    port_count = serializers.SerializerMethodField()

    class Meta:
        model = Organization
        fields = [
            'id', 'organization_name', 'display_name', 'organization_code',
            'register_office', 'country', 'telephone', 'fax', 'website', 'logo_url',
            'is_active', 'port_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'port_count', 'created_at', 'updated_at']

    def get_port_count(self, obj):
        return obj.ports.count()

    def validate_organization_code(self, value):
        return value.strip().upper()
