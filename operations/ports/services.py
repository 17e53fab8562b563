"""
Service layer for ports and port admin contacts.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from core.notifications.models import NotificationTypes
from core.notifications.services import NotificationService
from .models import Port, PortAdminContact

logger = logging.getLogger(__name__)


class PortService:

    @staticmethod
    def list_ports(user, query_params):
        """
        Ports visible to the user.

        System admins see every port; other users see their own port and the
        ports of their assigned terminals.

        Query Params:
        - organization: organization id
        - is_active: true | false
        - search: port name or display name
        """
        queryset = Port.objects.select_related('organization')

        if not user.is_system_admin():
            port_ids = set(user.terminals.values_list('port_id', flat=True))
            if user.port_id:
                port_ids.add(user.port_id)
            queryset = queryset.filter(pk__in=port_ids)

        organization = query_params.get('organization')
        if organization and str(organization).isdigit():
            queryset = queryset.filter(organization_id=organization)

        return (
            queryset
            .filter_by_active_param(query_params)
            .filter_by_search_params(query_params)
            .order_by('port_name')
        )

    @staticmethod
    @transaction.atomic
    def create(user, data):
        port = Port(**data)
        port.full_clean()
        port.save()
        logger.info("Port %s created by %s", port.display_name, user.email)
        return port

    @staticmethod
    @transaction.atomic
    def update(user, port, data):
        for key, value in data.items():
            setattr(port, key, value)
        port.full_clean()
        port.save()
        logger.info("Port %s updated by %s", port.display_name, user.email)
        return port

    @staticmethod
    def toggle(user, port):
        is_active = port.toggle_status()
        logger.info("Port %s %s by %s", port.display_name, 'activated' if is_active else 'deactivated', user.email)
        return port

    @staticmethod
    def delete(user, port):
        """Raises ValidationError while the port still has terminals."""
        name = port.display_name
        port.delete()
        logger.info("Port %s deleted by %s", name, user.email)


class PortAdminContactService:

    @staticmethod
    @transaction.atomic
    def create(user, port, data):
        """
        Create an inactive contact with a fresh verification token.
        """
        contact = PortAdminContact(port=port, **data)
        contact.issue_verification_token()
        contact.full_clean()
        contact.save()
        logger.info("Admin contact %s added to port %s by %s", contact.email, port.display_name, user.email)
        return contact

    @staticmethod
    @transaction.atomic
    def update(user, contact, data):
        for key, value in data.items():
            setattr(contact, key, value)
        contact.full_clean()
        contact.save()
        return contact

    @staticmethod
    @transaction.atomic
    def resend_verification(user, contact):
        if contact.is_verified:
            raise ValidationError("Contact is already verified")
        contact.issue_verification_token()
        contact.save(update_fields=['verification_token', 'verification_token_expires', 'updated_at'])
        logger.info("Verification token reissued for %s by %s", contact.email, user.email)
        return contact

    @staticmethod
    @transaction.atomic
    def verify(token, now=None):
        """
        Verify a contact by token: the contact becomes verified and active,
        the token is consumed and the matching user account (same email) is linked.

        Raises:
            ValidationError: unknown or expired token
        """
        now = now or timezone.now()
        contact = PortAdminContact.objects.select_related('port').filter(verification_token=token).first()
        if contact is None:
            raise ValidationError({'token': 'Invalid verification token'})
        if contact.token_expired(now):
            raise ValidationError({'token': 'Verification token has expired'})

        contact.is_verified = True
        contact.status = PortAdminContact.Status.ACTIVE
        contact.verification_token = None
        contact.verification_token_expires = None
        if contact.user_id is None:
            contact.user = get_user_model().objects.filter(email__iexact=contact.email).first()
        contact.save()

        NotificationService.notify_system_admins(
            NotificationTypes.PORT_ADMIN_VERIFIED,
            'Port admin verified',
            f"{contact.contact_name} verified as admin contact for {contact.port.port_name}",
            data={'contact_id': contact.id, 'port_id': contact.port_id},
        )
        logger.info("Admin contact %s verified for port %s", contact.email, contact.port.display_name)
        return contact
