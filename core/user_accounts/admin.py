from django.contrib import admin
from .models import CustomUser, UserAuditLog, UserType


@admin.register(UserType)
class UserTypeAdmin(admin.ModelAdmin):
    """Admin configuration for UserType model"""
    list_display = ['type_name', 'description']
    search_fields = ['type_name']


@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    """Admin configuration for CustomUser model"""
    list_display = ['email', 'first_name', 'last_name', 'user_type', 'role', 'port', 'is_active']
    list_filter = ['user_type', 'role', 'is_active']
    search_fields = ['email', 'first_name', 'last_name', 'phone_number']
    readonly_fields = ['last_login']
    filter_horizontal = ['terminals']

    fieldsets = (
        ('User Information', {
            'fields': ('email', 'first_name', 'last_name', 'phone_number', 'is_active')
        }),
        ('Type & Role', {
            'fields': ('user_type', 'role')
        }),
        ('Assignments', {
            'fields': ('port', 'terminals')
        }),
        ('Authentication', {
            'fields': ('password', 'last_login')
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        """Make certain fields readonly for super admin users"""
        readonly = list(self.readonly_fields)
        if obj and obj.is_super_admin():
            readonly.extend(['user_type', 'email'])
        return readonly


@admin.register(UserAuditLog)
class UserAuditLogAdmin(admin.ModelAdmin):
    list_display = ['target_user', 'action', 'performed_by', 'created_at']
    list_filter = ['action']
    readonly_fields = [f.name for f in UserAuditLog._meta.fields]
