"""
Tests for Port and Port Admin Contact API views.
"""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import (
    assign_role,
    create_organization,
    create_port,
    create_subscription_types,
    create_terminal,
    setup_admin_permissions,
    setup_core_data,
)
from core.notifications.models import Notification, NotificationTypes
from core.roles.core_config import CoreRoles
from operations.ports.models import Port, PortAdminContact
from operations.ports.services import PortAdminContactService
from operations.terminals.models import Terminal

User = get_user_model()


def setUpModule():
    """Run once for the entire module at the beginning"""
    setup_core_data()


class PortAPITest(APITestCase):
    """Test /api/ports/ endpoints as a system admin"""

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email='admin@example.com',
            first_name='Admin',
            last_name='User',
            password='TestPass123'
        )
        setup_admin_permissions(self.admin)
        self.client.force_authenticate(user=self.admin)

        self.organization = create_organization('ACME')
        self.port = create_port('PRTA', organization=self.organization)

    def test_create_port(self):
        data = {
            'port_name': 'North Harbour',
            'display_name': 'nrth',
            'organization': self.organization.id,
            'address': 'Pier 1',
            'country': 'India',
            'state': 'Gujarat',
        }
        response = self.client.post('/api/ports/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['display_name'], 'NRTH')
        self.assertEqual(response.data['organization_name'], self.organization.organization_name)

    def test_display_name_max_length(self):
        data = {
            'port_name': 'Too Long',
            'display_name': 'TOOLONG',
            'organization': self.organization.id,
            'address': 'Pier 1',
            'country': 'India',
            'state': 'Gujarat',
        }
        response = self.client.post('/api/ports/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('display_name', response.data)

    def test_filter_by_organization(self):
        create_port('PRTB')
        response = self.client.get('/api/ports/', {'organization': self.organization.id})
        names = [p['display_name'] for p in response.data['data']['results']]
        self.assertEqual(names, ['PRTA'])

    def test_delete_refused_while_terminals_exist(self):
        create_terminal(self.port, 'TRMA')
        response = self.client.delete(f'/api/ports/{self.port.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Port.objects.filter(pk=self.port.pk).exists())

    def test_toggle_status(self):
        response = self.client.patch(f'/api/ports/{self.port.id}/toggle-status/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_active'])

    def test_port_terminals_and_available_terminals(self):
        types = create_subscription_types()
        today = timezone.localdate()
        create_terminal(self.port, 'WAIT')
        create_terminal(
            self.port, 'LIVE',
            status=Terminal.Status.ACTIVE,
            is_active=True,
            subscription_type=types[12],
            activation_start_date=today - timedelta(days=10),
            activation_end_date=today + timedelta(days=10),
        )
        create_terminal(
            self.port, 'OLD',
            status=Terminal.Status.ACTIVE,
            is_active=True,
            subscription_type=types[1],
            activation_start_date=today - timedelta(days=60),
            activation_end_date=today - timedelta(days=30),
        )

        response = self.client.get(f'/api/ports/{self.port.id}/terminals/')
        self.assertEqual(response.data['data']['count'], 3)

        response = self.client.get(f'/api/ports/{self.port.id}/available-terminals/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t['short_code'] for t in response.data], ['LIVE'])


class PortScopingTest(APITestCase):
    """Non-admin users only see their own port"""

    def setUp(self):
        self.client = APIClient()
        self.port = create_port('PRTA')
        self.other_port = create_port('PRTB')
        self.port_admin = User.objects.create_user(
            email='portadmin@example.com',
            first_name='Port',
            last_name='Admin',
            password='TestPass123',
            port=self.port
        )
        assign_role(self.port_admin, CoreRoles.PORT_ADMIN)
        self.client.force_authenticate(user=self.port_admin)

    def test_list_only_own_port(self):
        response = self.client.get('/api/ports/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['id'] for p in response.data['data']['results']], [self.port.id])

    def test_other_port_not_found(self):
        response = self.client.get(f'/api/ports/{self.other_port.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_read_only_access(self):
        response = self.client.patch(f'/api/ports/{self.port.id}/', {'state': 'Kerala'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class PortAdminContactTest(APITestCase):
    """Test the admin contact verification flow"""

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email='admin@example.com',
            first_name='Admin',
            last_name='User',
            password='TestPass123'
        )
        setup_admin_permissions(self.admin)
        self.client.force_authenticate(user=self.admin)
        self.port = create_port('PRTA')
        self.contact_data = {
            'contact_name': 'Asha Rao',
            'designation': 'Harbour Master',
            'email': 'Asha.Rao@example.com',
            'mobile_number': '+919812345678',
        }

    def test_create_contact_starts_inactive(self):
        response = self.client.post(f'/api/ports/{self.port.id}/contacts/', self.contact_data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], PortAdminContact.Status.INACTIVE)
        self.assertFalse(response.data['is_verified'])
        self.assertEqual(response.data['email'], 'asha.rao@example.com')
        self.assertNotIn('verification_token', response.data)

        contact = PortAdminContact.objects.get(pk=response.data['id'])
        self.assertIsNotNone(contact.verification_token)
        self.assertFalse(contact.token_expired())

    def test_verify_contact(self):
        contact_user = User.objects.create_user(
            email='asha.rao@example.com', first_name='Asha', last_name='Rao', password='TestPass123'
        )
        contact = PortAdminContactService.create(self.admin, self.port, dict(self.contact_data, email='asha.rao@example.com'))

        self.client.force_authenticate(user=None)
        response = self.client.post(
            '/api/ports/contacts/verify/', {'token': contact.verification_token}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        contact.refresh_from_db()
        self.assertTrue(contact.is_verified)
        self.assertEqual(contact.status, PortAdminContact.Status.ACTIVE)
        self.assertIsNone(contact.verification_token)
        self.assertEqual(contact.user, contact_user)
        self.assertTrue(
            Notification.objects.filter(user=self.admin, type=NotificationTypes.PORT_ADMIN_VERIFIED).exists()
        )

    def test_verify_unknown_token(self):
        response = self.client.post('/api/ports/contacts/verify/', {'token': 'nope'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('token', response.data)

    def test_verify_expired_token(self):
        contact = PortAdminContactService.create(self.admin, self.port, self.contact_data)
        contact.verification_token_expires = timezone.now() - timedelta(minutes=1)
        contact.save()

        response = self.client.post(
            '/api/ports/contacts/verify/', {'token': contact.verification_token}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        contact.refresh_from_db()
        self.assertFalse(contact.is_verified)

    def test_resend_verification(self):
        contact = PortAdminContactService.create(self.admin, self.port, self.contact_data)
        old_token = contact.verification_token

        response = self.client.post(f'/api/ports/contacts/{contact.id}/resend-verification/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        contact.refresh_from_db()
        self.assertNotEqual(contact.verification_token, old_token)

    def test_resend_after_verification_refused(self):
        contact = PortAdminContactService.create(self.admin, self.port, self.contact_data)
        PortAdminContactService.verify(contact.verification_token)

        response = self.client.post(f'/api/ports/contacts/{contact.id}/resend-verification/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
