from django.contrib import admin
from .models import (
    Contract,
    ContractCargoDetail,
    ContractSpecialCondition,
    ContractStorageCharge,
    ContractTariff,
    Customer,
)


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['customer_code', 'customer_name', 'terminal', 'email', 'status']
    list_filter = ['status', 'terminal']
    search_fields = ['customer_code', 'customer_name', 'email']
    readonly_fields = ['customer_code', 'created_at', 'updated_at']


class ContractTariffInline(admin.TabularInline):
    model = ContractTariff
    extra = 0


class ContractCargoDetailInline(admin.TabularInline):
    model = ContractCargoDetail
    extra = 0


class ContractStorageChargeInline(admin.TabularInline):
    model = ContractStorageCharge
    extra = 0


class ContractSpecialConditionInline(admin.TabularInline):
    model = ContractSpecialCondition
    extra = 0


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = ['contract_number', 'customer', 'valid_from', 'valid_to', 'is_active']
    list_filter = ['is_active']
    search_fields = ['contract_number', 'customer__customer_name']
    readonly_fields = ['renewed_from', 'created_by', 'updated_by', 'created_at', 'updated_at']
    inlines = [
        ContractTariffInline,
        ContractCargoDetailInline,
        ContractStorageChargeInline,
        ContractSpecialConditionInline,
    ]
