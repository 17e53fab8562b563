import re

from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from core.roles.models import Role
from core.roles.permissions import PermissionChecker
from .models import CustomUser, UserAuditLog, UserType


def _validate_password_strength(value):
    """Shared password rules for account creation, password change and reset"""
    if len(value) < 8:
        raise serializers.ValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', value):
        raise serializers.ValidationError("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', value):
        raise serializers.ValidationError("Password must contain at least one lowercase letter")

    if not re.search(r'\d', value):
        raise serializers.ValidationError("Password must contain at least one number")

    validate_password(value)
    return value


PHONE_REGEX = r'^(\+?\d{1,3})?[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}$'


def _validate_phone(value):
    if value and not re.match(PHONE_REGEX, value):
        raise serializers.ValidationError("Enter a valid phone number")
    return value


class UserTypeSerializer(serializers.ModelSerializer):
    """Serializer for UserType model"""
    class Meta:
        model = UserType
        fields = ['id', 'type_name', 'description']
        read_only_fields = ['id']


class UserListSerializer(serializers.ModelSerializer):
    """Read serializer used by the user management endpoints"""
    user_type = serializers.CharField(source='user_type.type_name', read_only=True)
    role_name = serializers.CharField(source='role.display_name', read_only=True, default=None)
    port_name = serializers.CharField(source='port.port_name', read_only=True, default=None)
    full_name = serializers.CharField(read_only=True)
    terminals = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name', 'phone_number',
            'user_type', 'role', 'role_name', 'port', 'port_name', 'terminals',
            'is_active', 'last_login', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class UserCreateSerializer(serializers.ModelSerializer):
    """
    Input for POST /api/users/.
    Role-creation rules and port/terminal scoping are enforced by UserService.
    """
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    confirm_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    user_type = serializers.SlugRelatedField(slug_field='type_name', queryset=UserType.objects.all())
    role = serializers.PrimaryKeyRelatedField(queryset=Role.objects.all(), required=False, allow_null=True)

    class Meta:
        model = CustomUser
        fields = [
            'email', 'first_name', 'last_name', 'phone_number', 'password', 'confirm_password',
            'user_type', 'role', 'port', 'terminals', 'is_active',
        ]
        extra_kwargs = {
            'terminals': {'required': False},
            'port': {'required': False},
        }

    def validate_email(self, value):
        if CustomUser.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered")
        return value.lower()

    def validate_phone_number(self, value):
        return _validate_phone(value)

    def validate_password(self, value):
        return _validate_password_strength(value)

    def validate(self, attrs):
        if attrs['password'] != attrs['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match"})
        return attrs


class UserUpdateSerializer(serializers.ModelSerializer):
    """Input for PUT/PATCH /api/users/<id>/ - password changes go through reset-password"""
    user_type = serializers.SlugRelatedField(slug_field='type_name', queryset=UserType.objects.all())
    role = serializers.PrimaryKeyRelatedField(queryset=Role.objects.all(), required=False, allow_null=True)

    class Meta:
        model = CustomUser
        fields = [
            'email', 'first_name', 'last_name', 'phone_number',
            'user_type', 'role', 'port', 'terminals', 'is_active',
        ]
        extra_kwargs = {
            'terminals': {'required': False},
            'port': {'required': False},
        }

    def validate_email(self, value):
        queryset = CustomUser.objects.filter(email__iexact=value)
        if self.instance:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("Email already registered")
        return value.lower()

    def validate_phone_number(self, value):
        return _validate_phone(value)


class UserProfileSerializer(serializers.ModelSerializer):
    """
    Serializer for users viewing/updating their own profile.
    Only names and phone number are editable.
    """
    user_type = serializers.CharField(source='user_type.type_name', read_only=True)
    role = serializers.CharField(source='role_name', read_only=True)
    port_name = serializers.CharField(source='port.port_name', read_only=True, default=None)

    class Meta:
        model = CustomUser
        fields = [
            'id', 'email', 'first_name', 'last_name', 'phone_number',
            'user_type', 'role', 'port', 'port_name', 'last_login',
        ]
        read_only_fields = ['id', 'email', 'user_type', 'role', 'port', 'port_name', 'last_login']

    def validate_phone_number(self, value):
        return _validate_phone(value)


class CurrentUserSerializer(serializers.ModelSerializer):
    """
    Payload of GET /api/auth/me: the user plus everything the client needs
    to gate routes and menus.
    """
    user_type = serializers.CharField(source='user_type.type_name', read_only=True)
    role = serializers.SerializerMethodField()
    role_permissions = serializers.SerializerMethodField()
    is_system_admin = serializers.SerializerMethodField()
    permission_summary = serializers.SerializerMethodField()
    terminals = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name', 'phone_number',
            'user_type', 'role', 'role_permissions', 'is_system_admin', 'permission_summary',
            'port', 'terminals', 'is_active', 'last_login',
        ]

    def get_role(self, obj):
        if not obj.role_id:
            return None
        return {'id': obj.role.id, 'name': obj.role.name, 'display_name': obj.role.display_name}

    def get_role_permissions(self, obj):
        return obj.get_role_permissions()

    def get_is_system_admin(self, obj):
        return obj.is_system_admin()

    def get_permission_summary(self, obj):
        return PermissionChecker(obj).get_permission_summary()


class ChangePasswordSerializer(serializers.Serializer):
    """Serializer for password change"""
    old_password = serializers.CharField(required=True, write_only=True)
    new_password = serializers.CharField(required=True, write_only=True)
    confirm_password = serializers.CharField(required=True, write_only=True)

    def validate_new_password(self, value):
        return _validate_password_strength(value)

    def validate(self, attrs):
        if attrs['new_password'] != attrs['confirm_password']:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match"})

        if attrs['old_password'] == attrs['new_password']:
            raise serializers.ValidationError({"new_password": "New password must be different from old password"})

        return attrs


class PasswordResetSerializer(serializers.Serializer):
    """Admin sets a temporary password for a user"""
    temporary_password = serializers.CharField(required=True, write_only=True)

    def validate_temporary_password(self, value):
        return _validate_password_strength(value)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class UserAuditLogSerializer(serializers.ModelSerializer):
    performed_by_name = serializers.SerializerMethodField()
    performed_by_email = serializers.EmailField(source='performed_by.email', read_only=True, default=None)

    class Meta:
        model = UserAuditLog
        fields = [
            'id', 'target_user', 'performed_by', 'performed_by_name', 'performed_by_email',
            'action', 'description', 'old_values', 'new_values', 'ip_address', 'user_agent', 'created_at',
        ]
        read_only_fields = fields

    def get_performed_by_name(self, obj):
        return obj.performed_by.full_name if obj.performed_by else None
