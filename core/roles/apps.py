from django.apps import AppConfig


class RolesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core.roles'
    label = 'roles'
    verbose_name = 'Roles, Menus and Permissions'
