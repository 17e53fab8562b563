from django.contrib import admin
from .models import Port, PortAdminContact


class PortAdminContactInline(admin.TabularInline):
    model = PortAdminContact
    extra = 0
    fields = ['contact_name', 'designation', 'email', 'mobile_number', 'status', 'is_verified']
    readonly_fields = ['status', 'is_verified']


@admin.register(Port)
class PortAdmin(admin.ModelAdmin):
    list_display = ['display_name', 'port_name', 'organization', 'state', 'is_active']
    list_filter = ['is_active', 'organization']
    search_fields = ['port_name', 'display_name']
    inlines = [PortAdminContactInline]


@admin.register(PortAdminContact)
class PortAdminContactAdmin(admin.ModelAdmin):
    list_display = ['contact_name', 'email', 'port', 'status', 'is_verified']
    list_filter = ['status', 'is_verified']
    search_fields = ['contact_name', 'email']
    exclude = ['verification_token']
