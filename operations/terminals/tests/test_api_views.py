"""
Tests for Terminal, activation workflow and subscription type API views.
"""
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import (
    assign_role,
    create_port,
    create_subscription_types,
    create_terminal,
    setup_admin_permissions,
    setup_core_data,
)
from core.roles.core_config import CoreRoles, UserTypes
from operations.organizations.models import Organization
from operations.ports.models import Port
from operations.terminals.models import SubscriptionType, Terminal

User = get_user_model()


def setUpModule():
    """Run once for the entire module at the beginning"""
    setup_core_data()


class TerminalAPITest(APITestCase):
    """Test /api/terminals/ as a port admin"""

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

        self.terminal = create_terminal(self.port, 'TRMA')
        self.foreign_terminal = create_terminal(self.other_port, 'TRMB')
        self.valid_data = {
            'port': self.port.id,
            'terminal_name': 'Iron Ore Terminal',
            'short_code': 'iot1',
            'billing_address': 'Berth 9',
            'billing_city': 'Paradeep',
            'billing_pin_code': '754142',
            'same_as_billing': False,
            'shipping_address': 'Gate 2',
            'shipping_city': 'Cuttack',
            'shipping_pin_code': '753001',
        }

    def test_list_scoped_to_port(self):
        response = self.client.get('/api/terminals/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        codes = [t['short_code'] for t in response.data['data']['results']]
        self.assertEqual(codes, ['TRMA'])

    def test_create_terminal(self):
        response = self.client.post('/api/terminals/', self.valid_data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['short_code'], 'IOT1')
        self.assertEqual(response.data['status'], Terminal.Status.PROCESSING)
        self.assertFalse(response.data['is_active'])
        self.assertEqual(response.data['port_detail']['id'], self.port.id)
        self.assertEqual(
            response.data['port_detail']['organization']['id'], self.port.organization_id
        )
        self.assertEqual(response.data['created_by_email'], 'portadmin@example.com')

    def test_workflow_fields_are_read_only(self):
        data = dict(self.valid_data, status=Terminal.Status.ACTIVE, is_active=True)
        response = self.client.post('/api/terminals/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], Terminal.Status.PROCESSING)

    def test_shipping_required_when_different(self):
        data = dict(self.valid_data, shipping_address='', shipping_city='')
        response = self.client.post('/api/terminals/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('shipping_address', response.data)
        self.assertIn('shipping_city', response.data)

    def test_duplicate_short_code(self):
        data = dict(self.valid_data, short_code='trma')
        response = self.client.post('/api/terminals/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_in_other_port_forbidden(self):
        data = dict(self.valid_data, port=self.other_port.id)
        response = self.client.post('/api/terminals/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'You can only create terminals for your own port')

    def test_other_port_terminal_not_found(self):
        response = self.client.get(f'/api/terminals/{self.foreign_terminal.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_terminal(self):
        response = self.client.patch(
            f'/api/terminals/{self.terminal.id}/', {'billing_city': 'Bhubaneswar'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.terminal.refresh_from_db()
        self.assertEqual(self.terminal.billing_city, 'Bhubaneswar')
        self.assertEqual(self.terminal.shipping_city, 'Bhubaneswar')
        self.assertEqual(self.terminal.updated_by, self.port_admin)

    def test_delete_terminal(self):
        response = self.client.delete(f'/api/terminals/{self.terminal.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_activation_endpoints_forbidden(self):
        response = self.client.get('/api/terminals/pending-activation/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.put(
            f'/api/terminals/{self.terminal.id}/activate/',
            {'activation_start_date': '2025-01-01', 'subscription_type_id': 1},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_activation_log_readable(self):
        response = self.client.get(f'/api/terminals/{self.terminal.id}/activation-log/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class TerminalUserAPITest(APITestCase):
    """Terminal users only see their assigned terminals"""

    def setUp(self):
        self.client = APIClient()
        self.port = create_port('PRTA')
        self.assigned = create_terminal(self.port, 'TRMA')
        self.unassigned = create_terminal(self.port, 'TRMB')
        self.user = User.objects.create_user(
            email='terminaladmin@example.com',
            first_name='Terminal',
            last_name='Admin',
            password='TestPass123',
            user_type_name=UserTypes.TERMINAL_USER,
            port=self.port
        )
        self.user.terminals.set([self.assigned])
        assign_role(self.user, CoreRoles.TERMINAL_ADMIN)
        self.client.force_authenticate(user=self.user)

    def test_list_assigned_only(self):
        response = self.client.get('/api/terminals/')
        codes = [t['short_code'] for t in response.data['data']['results']]
        self.assertEqual(codes, ['TRMA'])

    def test_read_only(self):
        response = self.client.patch(f'/api/terminals/{self.assigned.id}/', {'gst': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class TerminalActivationAPITest(APITestCase):
    """Test the activation workflow endpoints as a system admin"""

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

        self.types = create_subscription_types()
        self.port = create_port('PRTA')
        self.terminal = create_terminal(self.port, 'TRMA')
        self.older = create_terminal(self.port, 'TRMB')
        Terminal.objects.filter(pk=self.older.pk).update(created_at='2020-01-01T00:00:00Z')

    def test_pending_activation_newest_first(self):
        response = self.client.get('/api/terminals/pending-activation/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        codes = [t['short_code'] for t in response.data['data']['results']]
        self.assertEqual(codes, ['TRMA', 'TRMB'])
        self.assertIn('organization', response.data['data']['results'][0]['port_detail'])

    def test_activate(self):
        data = {
            'activation_start_date': '2025-01-01',
            'subscription_type_id': self.types[12].id,
            'work_order_no': ' WO-9 ',
            'work_order_date': '2024-12-15',
        }
        response = self.client.put(f'/api/terminals/{self.terminal.id}/activate/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Terminal activated successfully')
        self.assertEqual(response.data['data']['status'], Terminal.Status.ACTIVE)
        self.assertEqual(response.data['data']['activation_end_date'], '2026-01-01')
        self.assertEqual(response.data['data']['work_order_no'], 'WO-9')
        self.assertEqual(response.data['data']['subscription_type_name'], '12 Months')

    def test_activate_missing_work_order(self):
        data = {'activation_start_date': '2025-01-01', 'subscription_type_id': self.types[48].id}
        response = self.client.put(f'/api/terminals/{self.terminal.id}/activate/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('work_order_no', response.data)

    def test_activate_unknown_subscription_type(self):
        data = {'activation_start_date': '2025-01-01', 'subscription_type_id': 999999}
        response = self.client.put(f'/api/terminals/{self.terminal.id}/activate/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('subscription_type_id', response.data)

    def test_suspend(self):
        data = {'activation_start_date': '2025-01-01', 'subscription_type_id': self.types[1].id}
        self.client.put(f'/api/terminals/{self.terminal.id}/activate/', data, format='json')

        response = self.client.put(
            f'/api/terminals/{self.terminal.id}/suspend/',
            {'suspension_remarks': 'Safety audit pending'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Terminal suspended successfully')
        self.assertEqual(response.data['data']['status'], Terminal.Status.SUSPENDED)

        response = self.client.get(f'/api/terminals/{self.terminal.id}/activation-log/')
        actions = [entry['action'] for entry in response.data]
        self.assertEqual(actions, ['activated', 'suspended'])
        self.assertEqual(response.data[1]['data'], {'remarks': 'Safety audit pending'})
        self.assertEqual(response.data[1]['performed_by_email'], 'admin@example.com')

    def test_suspend_short_remarks(self):
        response = self.client.put(
            f'/api/terminals/{self.terminal.id}/suspend/', {'suspension_remarks': 'too short'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('suspension_remarks', response.data)

    def test_suspend_processing_terminal(self):
        response = self.client.put(
            f'/api/terminals/{self.terminal.id}/suspend/',
            {'suspension_remarks': 'Not active yet at all'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Only active terminals can be suspended')

    def test_subscription_types(self):
        response = self.client.get('/api/subscription-types/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t['months'] for t in response.data], [1, 12, 24, 48])
        self.assertEqual([t['requires_work_order'] for t in response.data], [False, True, True, True])


class InitPortDataCommandTest(TestCase):

    def test_seeds_reference_data_idempotently(self):
        call_command('init_port_data', stdout=StringIO())
        call_command('init_port_data', stdout=StringIO())

        self.assertEqual(Organization.objects.filter(organization_code='JSWIL').count(), 1)
        self.assertEqual(
            set(Port.objects.values_list('display_name', flat=True)),
            {'JSWPP', 'JSWDP'}
        )
        self.assertEqual(
            list(SubscriptionType.objects.values_list('months', flat=True)),
            [1, 12, 24, 48]
        )
