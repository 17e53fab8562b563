"""
Notification service.

Other apps call NotificationService instead of creating Notification rows
directly. Fan-out failures are logged and never abort the caller.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from core.roles.core_config import SYSTEM_ADMIN_ROLE_NAMES, UserTypes
from .models import Notification

logger = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def notify(user, type, title, message, data=None):
        """Create one notification for one user."""
        return Notification.objects.create(
            user=user,
            type=type,
            title=title,
            message=message,
            data=data,
        )

    @staticmethod
    def get_system_admins():
        User = get_user_model()
        return User.objects.filter(
            Q(user_type__type_name=UserTypes.SUPER_ADMIN) | Q(role__name__in=SYSTEM_ADMIN_ROLE_NAMES),
            is_active=True,
        ).distinct()

    @staticmethod
    def notify_system_admins(type, title, message, data=None):
        """
        Notify every active system admin.

        Returns:
            Number of notifications created
        """
        try:
            with transaction.atomic():
                admins = list(NotificationService.get_system_admins())
                Notification.objects.bulk_create([
                    Notification(user=admin, type=type, title=title, message=message, data=data)
                    for admin in admins
                ])
        except Exception:
            logger.exception("Failed to notify system admins (%s)", type)
            return 0

        logger.info("Notification '%s' sent to %d system admin(s)", type, len(admins))
        return len(admins)

    @staticmethod
    def safe_notify(user, type, title, message, data=None):
        """notify() for side effects of another action: errors are logged, not raised."""
        if user is None:
            return None
        try:
            with transaction.atomic():
                return NotificationService.notify(user, type, title, message, data)
        except Exception:
            logger.exception("Failed to notify user %s (%s)", user.pk, type)
            return None

    @staticmethod
    def list_for_user(user, query_params):
        """
        Notifications of a user, newest first.
        Query Params:
        - is_read: true | false
        """
        queryset = Notification.objects.filter(user=user)
        is_read = str(query_params.get('is_read', '')).lower()
        if is_read in ('true', 'false'):
            queryset = queryset.filter(is_read=is_read == 'true')
        return queryset

    @staticmethod
    def unread_count(user):
        return Notification.objects.filter(user=user, is_read=False).count()

    @staticmethod
    def mark_read(notification):
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=['is_read'])
        return notification

    @staticmethod
    def mark_all_read(user):
        """Returns the number of notifications updated."""
        return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
