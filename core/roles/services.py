"""
Service layer for roles, menus and role creation permissions.
Views validate input with serializers and delegate persistence here.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Menu, Role, RoleCreationPermission

logger = logging.getLogger(__name__)


def _apply(instance, data):
    for key, value in data.items():
        setattr(instance, key, value)
    instance.full_clean()
    instance.save()
    return instance


class RoleService:

    @staticmethod
    def list_roles(query_params):
        """
        Get roles filtered by ?search= and ?is_active=.
        """
        return (
            Role.objects.all()
            .filter_by_search_params(query_params)
            .filter_by_active_param(query_params)
            .order_by('name')
        )

    @staticmethod
    @transaction.atomic
    def create_role(user, data):
        role = _apply(Role(), data)
        logger.info("Role '%s' created by %s", role.name, user.email)
        return role

    @staticmethod
    @transaction.atomic
    def update_role(user, role, data):
        old_permissions = list(role.permissions or [])
        role = _apply(role, data)
        if old_permissions != role.permissions:
            logger.info(
                "Role '%s' permissions changed by %s: %s -> %s",
                role.name, user.email, old_permissions, role.permissions
            )
        return role

    @staticmethod
    def toggle_role(user, role):
        is_active = role.toggle_status()
        logger.info("Role '%s' %s by %s", role.name, 'activated' if is_active else 'deactivated', user.email)
        return role

    @staticmethod
    def delete_role(user, role):
        name = role.name
        role.delete()
        logger.info("Role '%s' deleted by %s", name, user.email)


class MenuService:

    @staticmethod
    def list_menus(query_params):
        """
        Get menus with optional filtering.
        Query Params:
        - menu_type: glink | plink
        - parent_id: children of a GLink
        - is_active: true | false
        - search: name or label
        """
        queryset = Menu.objects.select_related('parent').all()

        menu_type = query_params.get('menu_type')
        if menu_type:
            queryset = queryset.filter(menu_type=menu_type)

        parent_id = query_params.get('parent_id')
        if parent_id and str(parent_id).isdigit():
            queryset = queryset.filter(parent_id=parent_id)

        return (
            queryset
            .filter_by_active_param(query_params)
            .filter_by_search_params(query_params)
            .order_by('menu_type', 'sort_order', 'name')
        )

    @staticmethod
    @transaction.atomic
    def create_menu(user, data):
        menu = _apply(Menu(), data)
        logger.info("Menu '%s' (%s) created by %s", menu.name, menu.menu_type, user.email)
        return menu

    @staticmethod
    @transaction.atomic
    def update_menu(user, menu, data):
        menu = _apply(menu, data)
        logger.info("Menu '%s' updated by %s", menu.name, user.email)
        return menu

    @staticmethod
    def toggle_menu(user, menu):
        is_active = menu.toggle_status()
        logger.info("Menu '%s' %s by %s", menu.name, 'activated' if is_active else 'deactivated', user.email)
        return menu

    @staticmethod
    def delete_menu(user, menu):
        name = menu.name
        menu.delete()
        logger.info("Menu '%s' deleted by %s", name, user.email)

    @staticmethod
    @transaction.atomic
    def bulk_update_order(user, items):
        """
        Update sort_order for several menus at once.

        Args:
            items: list of {'id': int, 'sort_order': int}

        Raises:
            ValidationError if any id does not exist (nothing is saved)
        """
        ids = [item['id'] for item in items]
        menus = Menu.objects.in_bulk(ids)
        missing = sorted(set(ids) - set(menus.keys()))
        if missing:
            raise ValidationError({'id': f"Menu(s) not found: {', '.join(str(m) for m in missing)}"})

        for item in items:
            menu = menus[item['id']]
            menu.sort_order = item['sort_order']
        Menu.objects.bulk_update(menus.values(), ['sort_order'])

        logger.info("Menu order updated for %d menu(s) by %s", len(items), user.email)
        return Menu.objects.filter(pk__in=ids).order_by('sort_order', 'name')


class RoleCreationPermissionService:

    @staticmethod
    @transaction.atomic
    def create(user, data):
        allowed_roles = data.pop('allowed_roles', [])
        config = _apply(RoleCreationPermission(), data)
        config.allowed_roles.set(allowed_roles)
        logger.info(
            "Role creation permission for '%s' created by %s", config.creator_role.name, user.email
        )
        return config

    @staticmethod
    @transaction.atomic
    def update(user, config, data):
        allowed_roles = data.pop('allowed_roles', None)
        config = _apply(config, data)
        if allowed_roles is not None:
            config.allowed_roles.set(allowed_roles)
        logger.info(
            "Role creation permission for '%s' updated by %s", config.creator_role.name, user.email
        )
        return config
