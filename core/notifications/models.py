"""
In-app notifications shown in the portal header.
"""
from django.conf import settings
from django.db import models


class NotificationTypes:
    TERMINAL_ACTIVATION_REQUEST = 'terminal_activation_request'
    TERMINAL_ACTIVATED = 'terminal_activated'
    TERMINAL_SUSPENDED = 'terminal_suspended'
    PORT_ADMIN_VERIFIED = 'port_admin_verified'
    GENERAL = 'general'


class Notification(models.Model):
    """A message addressed to one user"""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    type = models.CharField(max_length=50, default=NotificationTypes.GENERAL, db_index=True)
    title = models.CharField(max_length=255)
    message = models.TextField()
    data = models.JSONField(null=True, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        verbose_name = 'Notification'
        verbose_name_plural = 'Notifications'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.type} for {self.user_id}: {self.title}"
