from django.apps import AppConfig


class ContractsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'operations.contracts'
    label = 'contracts'
    verbose_name = 'Customers & Contracts'
