from rest_framework import serializers

from .core_config import USER_TYPE_NAMES
from .models import Menu, Role, RoleCreationPermission
from .permissions import validate_permission_strings


class RoleSerializer(serializers.ModelSerializer):
    """Serializer for Role model"""
    permissions = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        allow_empty=True
    )
    user_count = serializers.SerializerMethodField()

    class Meta:
        model = Role
        fields = [
            'id', 'name', 'display_name', 'description', 'permissions',
            'is_active', 'user_count', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'user_count', 'created_at', 'updated_at']

    def get_user_count(self, obj):
        return obj.users.count()

    def validate_permissions(self, value):
        """Validate permission string format"""
        errors = validate_permission_strings(value)
        if errors:
            raise serializers.ValidationError(errors)
        # Keep order, drop duplicates
        return list(dict.fromkeys(value))


class RoleSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Role
        fields = ['id', 'name', 'display_name']


class MenuSerializer(serializers.ModelSerializer):
    """Serializer for Menu model (GLinks and PLinks)"""
    parent = serializers.PrimaryKeyRelatedField(
        queryset=Menu.objects.all(),
        required=False,
        allow_null=True
    )
    parent_name = serializers.CharField(source='parent.name', read_only=True, allow_null=True)
    children_count = serializers.SerializerMethodField()

    class Meta:
        model = Menu
        fields = [
            'id', 'name', 'label', 'icon', 'route', 'parent', 'parent_name',
            'sort_order', 'menu_type', 'is_active', 'children_count',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'parent_name', 'children_count', 'created_at', 'updated_at']

    def get_children_count(self, obj):
        return obj.children.count()

    def validate_name(self, value):
        """Menu names are used in permission strings and may not contain ':' or ','"""
        if ':' in value or ',' in value:
            raise serializers.ValidationError("Menu name cannot contain ':' or ','")
        return value.strip()

    def validate(self, attrs):
        """Validate GLink/PLink parent rules"""
        instance = self.instance
        menu_type = attrs.get('menu_type', instance.menu_type if instance else Menu.MenuType.GLINK)
        parent = attrs.get('parent', instance.parent if instance else None)

        if menu_type == Menu.MenuType.GLINK and parent is not None:
            raise serializers.ValidationError({'parent': 'A GLink cannot have a parent menu'})

        if menu_type == Menu.MenuType.PLINK:
            if parent is None:
                raise serializers.ValidationError({'parent': 'A PLink must have a parent GLink'})
            if instance and parent.pk == instance.pk:
                raise serializers.ValidationError({'parent': 'A menu cannot be its own parent'})
            if parent.menu_type != Menu.MenuType.GLINK:
                raise serializers.ValidationError({'parent': 'The parent of a PLink must be a GLink'})

        if instance and menu_type == Menu.MenuType.PLINK and instance.children.exists():
            raise serializers.ValidationError(
                {'menu_type': 'A menu with child menus cannot become a PLink'}
            )

        return attrs


class MenuOrderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    sort_order = serializers.IntegerField()


class MenuOrderSerializer(serializers.Serializer):
    """Body of POST /menus/bulk-update-order/"""
    items = MenuOrderItemSerializer(many=True, allow_empty=False)


class RoleCreationPermissionSerializer(serializers.ModelSerializer):
    """Serializer for RoleCreationPermission model"""
    creator_role = serializers.PrimaryKeyRelatedField(queryset=Role.objects.all())
    creator_role_name = serializers.CharField(source='creator_role.name', read_only=True)
    allowed_user_types = serializers.ListField(
        child=serializers.ChoiceField(choices=USER_TYPE_NAMES),
        required=False,
        allow_empty=True
    )
    allowed_roles = serializers.PrimaryKeyRelatedField(
        queryset=Role.objects.all(),
        many=True,
        required=False
    )

    class Meta:
        model = RoleCreationPermission
        fields = [
            'id', 'creator_role', 'creator_role_name', 'allowed_user_types',
            'allowed_roles', 'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'creator_role_name', 'created_at', 'updated_at']

    def validate_allowed_user_types(self, value):
        return list(dict.fromkeys(value))
