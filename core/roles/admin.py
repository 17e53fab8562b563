from django.contrib import admin
from .models import Menu, Role, RoleCreationPermission


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    """Admin configuration for Role model"""
    list_display = ['name', 'display_name', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'display_name']


@admin.register(Menu)
class MenuAdmin(admin.ModelAdmin):
    """Admin configuration for Menu model"""
    list_display = ['name', 'label', 'menu_type', 'parent', 'sort_order', 'is_active']
    list_filter = ['menu_type', 'is_active']
    search_fields = ['name', 'label', 'route']
    ordering = ['menu_type', 'sort_order']


@admin.register(RoleCreationPermission)
class RoleCreationPermissionAdmin(admin.ModelAdmin):
    list_display = ['creator_role', 'is_active']
    filter_horizontal = ['allowed_roles']
