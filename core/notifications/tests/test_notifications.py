"""
Tests for the notification service and the notification endpoints.
"""
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import assign_role, setup_admin_permissions, setup_core_data
from core.notifications.models import Notification, NotificationTypes
from core.notifications.services import NotificationService
from core.roles.core_config import CoreRoles

User = get_user_model()


def setUpModule():
    """Run once for the entire module at the beginning"""
    setup_core_data()


class NotificationServiceTest(TestCase):

    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@example.com', first_name='Admin', last_name='User', password='TestPass123'
        )
        setup_admin_permissions(self.admin)
        self.super_admin = User.objects.create_superuser(
            email='super@example.com', first_name='Super', last_name='Admin', password='TestPass123'
        )
        self.inactive_admin = User.objects.create_user(
            email='inactive@example.com', first_name='Gone', last_name='Admin',
            password='TestPass123', is_active=False
        )
        setup_admin_permissions(self.inactive_admin)
        self.port_admin = User.objects.create_user(
            email='portadmin@example.com', first_name='Port', last_name='Admin', password='TestPass123'
        )
        assign_role(self.port_admin, CoreRoles.PORT_ADMIN)

    def test_notify_system_admins(self):
        sent = NotificationService.notify_system_admins(
            NotificationTypes.TERMINAL_ACTIVATION_REQUEST,
            'Terminal activation request',
            'New terminal waiting',
            data={'terminal_id': 1},
        )
        self.assertEqual(sent, 2)
        recipients = set(Notification.objects.values_list('user__email', flat=True))
        self.assertEqual(recipients, {'admin@example.com', 'super@example.com'})
        self.assertEqual(Notification.objects.first().data, {'terminal_id': 1})

    def test_safe_notify_without_user(self):
        self.assertIsNone(NotificationService.safe_notify(None, NotificationTypes.GENERAL, 'Hi', 'There'))
        self.assertFalse(Notification.objects.exists())

    def test_failed_insert_leaves_transaction_usable(self):
        with self.assertLogs('core.notifications.services', level='ERROR'):
            result = NotificationService.safe_notify(self.port_admin, NotificationTypes.GENERAL, None, 'Body')
            sent = NotificationService.notify_system_admins(NotificationTypes.GENERAL, None, 'Body')
        self.assertIsNone(result)
        self.assertEqual(sent, 0)

        NotificationService.notify(self.port_admin, NotificationTypes.GENERAL, 'Title', 'Body')
        self.assertEqual(Notification.objects.count(), 1)

    def test_unread_count_and_mark_all_read(self):
        for i in range(3):
            NotificationService.notify(self.port_admin, NotificationTypes.GENERAL, f'Title {i}', 'Body')
        self.assertEqual(NotificationService.unread_count(self.port_admin), 3)
        self.assertEqual(NotificationService.mark_all_read(self.port_admin), 3)
        self.assertEqual(NotificationService.unread_count(self.port_admin), 0)


class NotificationAPITest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email='user@example.com', first_name='Some', last_name='User', password='TestPass123'
        )
        self.other = User.objects.create_user(
            email='other@example.com', first_name='Other', last_name='User', password='TestPass123'
        )
        self.client.force_authenticate(user=self.user)

        self.first = NotificationService.notify(self.user, NotificationTypes.GENERAL, 'First', 'One')
        self.second = NotificationService.notify(self.user, NotificationTypes.GENERAL, 'Second', 'Two')
        self.foreign = NotificationService.notify(self.other, NotificationTypes.GENERAL, 'Private', 'Three')

    def test_list_own_notifications_newest_first(self):
        response = self.client.get('/api/notifications/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        titles = [n['title'] for n in response.data['data']['results']]
        self.assertEqual(titles, ['Second', 'First'])

    def test_filter_by_read_state(self):
        NotificationService.mark_read(self.first)
        response = self.client.get('/api/notifications/', {'is_read': 'false'})
        titles = [n['title'] for n in response.data['data']['results']]
        self.assertEqual(titles, ['Second'])

    def test_unread_count(self):
        response = self.client.get('/api/notifications/unread-count/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)

    def test_mark_read(self):
        response = self.client.patch(f'/api/notifications/{self.first.id}/read/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['is_read'])

    def test_cannot_touch_other_users_notification(self):
        response = self.client.patch(f'/api/notifications/{self.foreign.id}/read/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.delete(f'/api/notifications/{self.foreign.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Notification.objects.filter(pk=self.foreign.pk).exists())

    def test_mark_all_read(self):
        response = self.client.patch('/api/notifications/mark-all-read/')
        self.assertEqual(response.data['updated'], 2)
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_delete(self):
        response = self.client.delete(f'/api/notifications/{self.first.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Notification.objects.filter(pk=self.first.pk).exists())
