from django.apps import AppConfig


class PortsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'operations.ports'
    label = 'ports'
    verbose_name = 'Ports'
