from django.apps import AppConfig


class OrganizationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'operations.organizations'
    label = 'organizations'
    verbose_name = 'Organizations'
