from django.contrib import admin
from .models import Organization


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ['organization_code', 'organization_name', 'country', 'is_active']
    list_filter = ['is_active', 'country']
    search_fields = ['organization_name', 'display_name', 'organization_code']
