from django.contrib import admin
from .models import ActivationLog, SubscriptionType, Terminal


@admin.register(SubscriptionType)
class SubscriptionTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'months']


class ActivationLogInline(admin.TabularInline):
    model = ActivationLog
    extra = 0
    readonly_fields = ['action', 'description', 'performed_by', 'data', 'created_at']
    can_delete = False


@admin.register(Terminal)
class TerminalAdmin(admin.ModelAdmin):
    list_display = ['short_code', 'terminal_name', 'port', 'status', 'is_active', 'activation_end_date']
    list_filter = ['status', 'is_active', 'port']
    search_fields = ['terminal_name', 'short_code']
    readonly_fields = ['created_by', 'updated_by', 'created_at', 'updated_at']
    inlines = [ActivationLogInline]
