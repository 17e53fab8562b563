"""
Tests for the terminal activation workflow and the subscription helpers.
"""
from datetime import date, datetime, timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from core.base.test_utils import (
    assign_role,
    create_port,
    create_subscription_types,
    create_terminal,
    setup_admin_permissions,
    setup_core_data,
)
from core.notifications.models import Notification, NotificationTypes
from core.roles.core_config import CoreRoles, UserTypes
from operations.terminals.models import ActivationLog, Terminal
from operations.terminals.services import (
    TerminalService,
    activate_terminal,
    calculate_end_date,
    suspend_terminal,
    visible_terminals,
)
from operations.terminals.utils import (
    get_active_and_subscribed_terminals,
    is_active_and_subscribed,
    remaining_days,
)

User = get_user_model()


def setUpModule():
    """Run once for the entire module at the beginning"""
    setup_core_data()


def _at(year, month, day):
    return timezone.make_aware(datetime(year, month, day, 12, 0))


class CalculateEndDateTest(SimpleTestCase):

    def test_adds_calendar_months(self):
        self.assertEqual(calculate_end_date(date(2025, 1, 15), 12), date(2026, 1, 15))
        self.assertEqual(calculate_end_date(date(2025, 3, 1), 48), date(2029, 3, 1))

    def test_clamps_to_month_end(self):
        self.assertEqual(calculate_end_date(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(calculate_end_date(date(2025, 1, 31), 1), date(2025, 2, 28))
        self.assertEqual(calculate_end_date(date(2024, 2, 29), 12), date(2025, 2, 28))


class TerminalCreationTest(TestCase):

    def setUp(self):
        self.port = create_port('PRTA')
        self.other_port = create_port('PRTB')
        self.admin = User.objects.create_user(
            email='admin@example.com', first_name='Admin', last_name='User', password='TestPass123'
        )
        setup_admin_permissions(self.admin)
        self.port_admin = User.objects.create_user(
            email='portadmin@example.com', first_name='Port', last_name='Admin',
            password='TestPass123', port=self.port
        )
        assign_role(self.port_admin, CoreRoles.PORT_ADMIN)
        self.data = {
            'port': self.port,
            'terminal_name': 'Coal Terminal',
            'short_code': 'COAL',
            'billing_address': 'Berth 7',
            'billing_city': 'Paradeep',
            'billing_pin_code': '754142',
            'same_as_billing': True,
        }

    def test_create_terminal_starts_processing(self):
        terminal = TerminalService.create_terminal(self.port_admin, self.data)
        self.assertEqual(terminal.status, Terminal.Status.PROCESSING)
        self.assertFalse(terminal.is_active)
        self.assertEqual(terminal.created_by, self.port_admin)
        self.assertEqual(terminal.shipping_city, 'Paradeep')
        self.assertEqual(
            list(terminal.activation_logs.values_list('action', flat=True)),
            [ActivationLog.Action.CREATED]
        )

    def test_create_terminal_notifies_system_admins(self):
        terminal = TerminalService.create_terminal(self.port_admin, self.data)
        notification = Notification.objects.get(user=self.admin)
        self.assertEqual(notification.type, NotificationTypes.TERMINAL_ACTIVATION_REQUEST)
        self.assertEqual(notification.data, {
            'terminal_id': terminal.id,
            'terminal_name': 'Coal Terminal',
            'port_name': self.port.port_name,
        })
        self.assertFalse(Notification.objects.filter(user=self.port_admin).exists())

    def test_cannot_create_for_another_port(self):
        data = dict(self.data, port=self.other_port)
        with self.assertRaises(PermissionDenied):
            TerminalService.create_terminal(self.port_admin, data)

    def test_system_admin_creates_anywhere(self):
        data = dict(self.data, port=self.other_port)
        terminal = TerminalService.create_terminal(self.admin, data)
        self.assertEqual(terminal.port, self.other_port)

    def test_port_admin_cannot_move_terminal(self):
        terminal = create_terminal(self.port, 'TRMA')
        with self.assertRaises(PermissionDenied):
            TerminalService.update_terminal(self.port_admin, terminal, {'port': self.other_port})


class ActivationWorkflowTest(TestCase):

    def setUp(self):
        self.types = create_subscription_types()
        self.port = create_port('PRTA')
        self.admin = User.objects.create_user(
            email='admin@example.com', first_name='Admin', last_name='User', password='TestPass123'
        )
        setup_admin_permissions(self.admin)
        self.creator = User.objects.create_user(
            email='creator@example.com', first_name='Port', last_name='Admin',
            password='TestPass123', port=self.port
        )
        self.terminal = create_terminal(self.port, 'TRMA', created_by=self.creator)

    def test_activate_one_month_without_work_order(self):
        terminal = activate_terminal(self.admin, self.terminal, date(2025, 1, 31), self.types[1])

        self.assertEqual(terminal.status, Terminal.Status.ACTIVE)
        self.assertTrue(terminal.is_active)
        self.assertEqual(terminal.activation_end_date, date(2025, 2, 28))
        self.assertEqual(terminal.work_order_no, '')

        log = terminal.activation_logs.get(action=ActivationLog.Action.ACTIVATED)
        self.assertEqual(log.performed_by, self.admin)
        self.assertEqual(log.data, {
            'subscription_type': '1 Month',
            'months': 1,
            'start': '2025-01-31',
            'end': '2025-02-28',
            'work_order_no': None,
        })

        notification = Notification.objects.get(user=self.creator)
        self.assertEqual(notification.type, NotificationTypes.TERMINAL_ACTIVATED)

    def test_failed_notification_does_not_undo_activation(self):
        def broken_notify(user, type, title, message, data=None):
            return Notification.objects.create(user=user, type=type, title=None, message=message)

        with mock.patch('core.notifications.services.NotificationService.notify', side_effect=broken_notify):
            with self.assertLogs('core.notifications.services', level='ERROR'):
                activate_terminal(self.admin, self.terminal, date(2025, 1, 1), self.types[1])

        self.terminal.refresh_from_db()
        self.assertEqual(self.terminal.status, Terminal.Status.ACTIVE)
        self.assertTrue(self.terminal.activation_logs.filter(action=ActivationLog.Action.ACTIVATED).exists())
        self.assertFalse(Notification.objects.filter(user=self.creator).exists())

    def test_long_subscription_requires_work_order(self):
        with self.assertRaises(ValidationError) as ctx:
            activate_terminal(self.admin, self.terminal, date(2025, 1, 1), self.types[12])
        self.assertEqual(set(ctx.exception.message_dict), {'work_order_no', 'work_order_date'})

        self.terminal.refresh_from_db()
        self.assertEqual(self.terminal.status, Terminal.Status.PROCESSING)

    def test_activate_with_work_order(self):
        terminal = activate_terminal(
            self.admin, self.terminal, date(2025, 1, 1), self.types[24],
            work_order_no='WO-77', work_order_date=date(2024, 12, 20)
        )
        self.assertEqual(terminal.activation_end_date, date(2027, 1, 1))
        self.assertEqual(terminal.work_order_no, 'WO-77')

    def test_cannot_activate_active_terminal(self):
        activate_terminal(self.admin, self.terminal, date(2025, 1, 1), self.types[1])
        with self.assertRaises(ValidationError):
            activate_terminal(self.admin, self.terminal, date(2025, 2, 1), self.types[1])

    def test_suspend_and_reactivate(self):
        activate_terminal(self.admin, self.terminal, date(2025, 1, 1), self.types[1])
        terminal = suspend_terminal(self.admin, self.terminal, '  Unpaid invoices for March  ')

        self.assertEqual(terminal.status, Terminal.Status.SUSPENDED)
        self.assertFalse(terminal.is_active)
        self.assertEqual(terminal.suspension_remarks, 'Unpaid invoices for March')
        self.assertTrue(
            Notification.objects.filter(user=self.creator, type=NotificationTypes.TERMINAL_SUSPENDED).exists()
        )

        terminal = activate_terminal(self.admin, terminal, date(2025, 4, 1), self.types[1])
        self.assertEqual(terminal.suspension_remarks, '')
        self.assertEqual(
            list(terminal.activation_logs.values_list('action', flat=True)),
            [ActivationLog.Action.ACTIVATED, ActivationLog.Action.SUSPENDED, ActivationLog.Action.ACTIVATED]
        )

    def test_suspend_requires_remarks(self):
        activate_terminal(self.admin, self.terminal, date(2025, 1, 1), self.types[1])
        with self.assertRaises(ValidationError) as ctx:
            suspend_terminal(self.admin, self.terminal, '   short   ')
        self.assertIn('suspension_remarks', ctx.exception.message_dict)

    def test_only_active_terminals_can_be_suspended(self):
        with self.assertRaises(ValidationError):
            suspend_terminal(self.admin, self.terminal, 'Not yet activated anyway')

    def test_activation_without_creator_still_succeeds(self):
        terminal = create_terminal(self.port, 'ORPHAN')
        activate_terminal(self.admin, terminal, date(2025, 1, 1), self.types[1])
        self.assertFalse(Notification.objects.filter(type=NotificationTypes.TERMINAL_ACTIVATED).exists())


class SubscriptionHelpersTest(TestCase):

    def setUp(self):
        self.types = create_subscription_types()
        self.port = create_port('PRTA')
        self.terminal = create_terminal(
            self.port, 'TRMA',
            status=Terminal.Status.ACTIVE,
            subscription_type=self.types[1],
            activation_start_date=date(2025, 6, 1),
            activation_end_date=date(2025, 7, 1),
        )

    def test_inside_period(self):
        self.assertTrue(is_active_and_subscribed(self.terminal, _at(2025, 6, 15)))
        self.assertTrue(is_active_and_subscribed(self.terminal, _at(2025, 7, 1)))
        self.assertEqual(remaining_days(self.terminal, _at(2025, 6, 15)), 16)

    def test_outside_period(self):
        self.assertFalse(is_active_and_subscribed(self.terminal, _at(2025, 7, 2)))
        self.assertFalse(is_active_and_subscribed(self.terminal, _at(2025, 5, 31)))
        self.assertEqual(remaining_days(self.terminal, _at(2025, 8, 1)), 0)

    def test_requires_subscription_and_active_status(self):
        self.terminal.status = Terminal.Status.SUSPENDED
        self.assertFalse(is_active_and_subscribed(self.terminal, _at(2025, 6, 15)))
        self.assertIsNone(remaining_days(self.terminal, _at(2025, 6, 15)))

        unsubscribed = create_terminal(self.port, 'TRMB', status=Terminal.Status.ACTIVE)
        self.assertFalse(is_active_and_subscribed(unsubscribed))

    def test_missing_dates_count_as_subscribed(self):
        terminal = create_terminal(
            self.port, 'TRMC', status=Terminal.Status.ACTIVE, subscription_type=self.types[12]
        )
        self.assertTrue(is_active_and_subscribed(terminal))

    def test_queryset_matches_predicate(self):
        create_terminal(self.port, 'TRMD')
        codes = set(
            get_active_and_subscribed_terminals(now=_at(2025, 6, 15)).values_list('short_code', flat=True)
        )
        self.assertEqual(codes, {'TRMA'})

    def test_now_default_uses_today(self):
        today = timezone.localdate()
        terminal = create_terminal(
            self.port, 'TODAY',
            status=Terminal.Status.ACTIVE,
            subscription_type=self.types[1],
            activation_start_date=today,
            activation_end_date=today + timedelta(days=5),
        )
        self.assertEqual(remaining_days(terminal), 5)


class VisibleTerminalsTest(TestCase):

    def setUp(self):
        self.port = create_port('PRTA')
        self.other_port = create_port('PRTB')
        self.terminal_a = create_terminal(self.port, 'TRMA')
        self.terminal_b = create_terminal(self.port, 'TRMB')
        self.foreign = create_terminal(self.other_port, 'TRMC')

    def test_system_admin_sees_all(self):
        admin = User.objects.create_user(
            email='admin@example.com', first_name='Admin', last_name='User', password='TestPass123'
        )
        setup_admin_permissions(admin)
        self.assertEqual(visible_terminals(admin).count(), 3)

    def test_port_user_sees_port(self):
        user = User.objects.create_user(
            email='port@example.com', first_name='Port', last_name='User',
            password='TestPass123', port=self.port
        )
        self.assertEqual(set(visible_terminals(user)), {self.terminal_a, self.terminal_b})

    def test_terminal_user_sees_assigned(self):
        user = User.objects.create_user(
            email='term@example.com', first_name='Term', last_name='User', password='TestPass123',
            user_type_name=UserTypes.TERMINAL_USER, port=self.port
        )
        user.terminals.set([self.terminal_b])
        self.assertEqual(list(visible_terminals(user)), [self.terminal_b])

    def test_user_without_port_sees_nothing(self):
        user = User.objects.create_user(
            email='nobody@example.com', first_name='No', last_name='Body', password='TestPass123'
        )
        self.assertFalse(visible_terminals(user).exists())
