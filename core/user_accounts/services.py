"""
Service layer for user accounts.

UserService enforces the role-creation rules and port/terminal scoping;
AuditService records every administrative change in UserAuditLog.
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction

from core.roles.core_config import UserTypes
from core.roles.role_creation import can_assign_role, can_create_user_type
from .models import CustomUser, UserAuditLog

logger = logging.getLogger(__name__)


def client_meta(request):
    """(ip_address, user_agent) of a request; (None, '') without one."""
    if request is None:
        return None, ''
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    ip_address = forwarded.split(',')[0].strip() if forwarded else request.META.get('REMOTE_ADDR')
    return ip_address or None, request.META.get('HTTP_USER_AGENT', '')


# ============================================================================
# Audit
# ============================================================================

class AuditService:
    """
    Writes UserAuditLog entries.

    Audit failures never abort the surrounding request: they are logged and
    the method returns None.
    """

    @staticmethod
    def snapshot(user):
        """Tracked values of a user, as stored in old_values / new_values."""
        return {
            'email': user.email,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'user_type': user.user_type.type_name,
            'role': user.role_name,
            'port_id': user.port_id,
            'terminal_ids': sorted(user.terminals.values_list('id', flat=True)) if user.pk else [],
            'is_active': user.is_active,
        }

    @staticmethod
    def log(target_user, performed_by, action, description='', old_values=None, new_values=None,
            request=None):
        ip_address, user_agent = client_meta(request)
        try:
            # Savepoint: a failed insert must leave the outer transaction usable
            with transaction.atomic():
                return UserAuditLog.objects.create(
                    target_user=target_user,
                    performed_by=performed_by,
                    action=action,
                    description=description,
                    old_values=old_values,
                    new_values=new_values,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
        except Exception:
            logger.exception("Failed to write %s audit log for user %s", action, target_user.pk)
            return None

    @staticmethod
    def log_user_created(target_user, performed_by, request=None):
        return AuditService.log(
            target_user, performed_by, UserAuditLog.Action.CREATED,
            description=f"User account created with email: {target_user.email}",
            new_values=AuditService.snapshot(target_user),
            request=request,
        )

    @staticmethod
    def describe_changes(old_values, new_values):
        changes = []
        labels = [
            ('email', 'email'),
            ('first_name', 'first name'),
            ('last_name', 'last name'),
            ('user_type', 'user type'),
            ('role', 'role'),
        ]
        for key, label in labels:
            if old_values.get(key) != new_values.get(key):
                changes.append(f"{label} changed from {old_values.get(key)} to {new_values.get(key)}")
        if old_values.get('port_id') != new_values.get('port_id'):
            changes.append('port assignment changed')
        if old_values.get('terminal_ids') != new_values.get('terminal_ids'):
            changes.append('terminal assignments changed')
        return changes

    @staticmethod
    def log_user_updated(target_user, performed_by, old_values, new_values, request=None):
        """Log an update; nothing is written when no tracked value changed."""
        changes = AuditService.describe_changes(old_values, new_values)
        if not changes:
            return None
        return AuditService.log(
            target_user, performed_by, UserAuditLog.Action.UPDATED,
            description=f"User profile updated: {', '.join(changes)}",
            old_values=old_values,
            new_values=new_values,
            request=request,
        )

    @staticmethod
    def log_status_change(target_user, performed_by, old_status, new_status, request=None):
        def label(value):
            return 'active' if value else 'inactive'

        return AuditService.log(
            target_user, performed_by, UserAuditLog.Action.STATUS_CHANGED,
            description=f"User status changed from {label(old_status)} to {label(new_status)}",
            old_values={'is_active': old_status},
            new_values={'is_active': new_status},
            request=request,
        )

    @staticmethod
    def log_role_change(target_user, performed_by, old_role, new_role, request=None):
        return AuditService.log(
            target_user, performed_by, UserAuditLog.Action.ROLE_CHANGED,
            description=f"User role changed from {old_role} to {new_role}",
            old_values={'role': old_role},
            new_values={'role': new_role},
            request=request,
        )

    @staticmethod
    def log_password_reset(target_user, performed_by, request=None):
        return AuditService.log(
            target_user, performed_by, UserAuditLog.Action.PASSWORD_RESET,
            description=f"Temporary password set by {performed_by.email}",
            request=request,
        )

    @staticmethod
    def log_user_deleted(target_user, performed_by, request=None):
        old_values = AuditService.snapshot(target_user)
        return AuditService.log(
            target_user, performed_by, UserAuditLog.Action.DELETED,
            description=f"User account deleted: {target_user.email}",
            old_values=old_values,
            request=request,
        )


# ============================================================================
# Users
# ============================================================================

class UserService:

    @staticmethod
    def list_users(requesting_user, query_params):
        """
        Users visible to the requesting user.

        System admins see everyone; other users see the users of their own port.

        Query Params:
        - user_type: type name (e.g. terminal_user)
        - role: role id
        - port: port id
        - is_active: true | false
        - search: email, first or last name
        """
        queryset = CustomUser.objects.select_related('user_type', 'role', 'port').prefetch_related('terminals')

        if not requesting_user.is_system_admin():
            if requesting_user.port_id:
                queryset = queryset.filter(port_id=requesting_user.port_id)
            else:
                queryset = queryset.filter(pk=requesting_user.pk)

        user_type = query_params.get('user_type')
        if user_type:
            queryset = queryset.filter(user_type__type_name=user_type)

        role = query_params.get('role')
        if role and str(role).isdigit():
            queryset = queryset.filter(role_id=role)

        port = query_params.get('port')
        if port and str(port).isdigit():
            queryset = queryset.filter(port_id=port)

        return (
            queryset
            .filter_by_active_param(query_params)
            .filter_by_search_params(query_params)
            .order_by('email')
        )

    @staticmethod
    def check_creation_rules(requesting_user, user_type=None, role=None):
        """
        Raise PermissionDenied when the requesting user may not hand out the
        given user type or role.
        """
        if user_type is not None and not can_create_user_type(requesting_user, user_type.type_name):
            raise PermissionDenied(f"You are not allowed to create users of type '{user_type.type_name}'")
        if role is not None and not can_assign_role(requesting_user, role):
            raise PermissionDenied(f"You are not allowed to assign the role '{role.name}'")

    @staticmethod
    def check_port_scope(requesting_user, port):
        """Only system admins may place users outside their own port."""
        if port is None or requesting_user.is_system_admin():
            return
        if port.pk != requesting_user.port_id:
            raise PermissionDenied("You can only assign users to your own port")

    @staticmethod
    def validate_assignment(user_type, port, terminals):
        """
        Port users need a port; terminal users need a port and at least one
        terminal belonging to it.
        """
        type_name = user_type.type_name
        if type_name in (UserTypes.PORT_USER, UserTypes.TERMINAL_USER) and port is None:
            raise ValidationError({'port': f"A port is required for {type_name} accounts"})

        if type_name == UserTypes.TERMINAL_USER:
            if not terminals:
                raise ValidationError({'terminals': 'At least one terminal is required for terminal users'})
            foreign = [t.terminal_name for t in terminals if t.port_id != port.pk]
            if foreign:
                raise ValidationError({
                    'terminals': f"Terminal(s) not in port {port.port_name}: {', '.join(foreign)}"
                })

    @staticmethod
    @transaction.atomic
    def create_user(requesting_user, data, request=None):
        """
        Create a user account.

        Raises:
            PermissionDenied: user type or role not allowed for the requesting user
            ValidationError: port/terminal assignment invalid
        """
        data = dict(data)
        user_type = data.pop('user_type')
        role = data.pop('role', None)
        port = data.pop('port', None)
        terminals = list(data.pop('terminals', []))
        password = data.pop('password')
        data.pop('confirm_password', None)

        UserService.check_creation_rules(requesting_user, user_type, role)
        UserService.check_port_scope(requesting_user, port)
        UserService.validate_assignment(user_type, port, terminals)

        user = CustomUser.objects.create_user(
            email=data.pop('email'),
            first_name=data.pop('first_name'),
            last_name=data.pop('last_name', ''),
            password=password,
            user_type_name=user_type.type_name,
            role=role,
            port=port,
            **data
        )
        if terminals:
            user.terminals.set(terminals)

        AuditService.log_user_created(user, requesting_user, request)
        logger.info("User %s (%s) created by %s", user.email, user_type.type_name, requesting_user.email)
        return user

    @staticmethod
    @transaction.atomic
    def update_user(requesting_user, target_user, data, request=None):
        data = dict(data)
        old_values = AuditService.snapshot(target_user)
        old_role = target_user.role_name

        user_type = data.pop('user_type', target_user.user_type)
        role = data.pop('role', target_user.role)
        port = data.pop('port', target_user.port)
        terminals = data.pop('terminals', None)

        UserService.check_creation_rules(
            requesting_user,
            user_type if user_type.pk != target_user.user_type_id else None,
            role if role is not None and role.pk != target_user.role_id else None,
        )
        if port is not None and port.pk != target_user.port_id:
            UserService.check_port_scope(requesting_user, port)
        effective_terminals = list(terminals) if terminals is not None else list(target_user.terminals.all())
        UserService.validate_assignment(user_type, port, effective_terminals)

        for key, value in data.items():
            setattr(target_user, key, value)
        target_user.user_type = user_type
        target_user.role = role
        target_user.port = port
        target_user.save()
        if terminals is not None:
            target_user.terminals.set(terminals)

        new_values = AuditService.snapshot(target_user)
        AuditService.log_user_updated(target_user, requesting_user, old_values, new_values, request)
        if old_role != target_user.role_name:
            AuditService.log_role_change(target_user, requesting_user, old_role, target_user.role_name, request)
        return target_user

    @staticmethod
    def toggle_status(requesting_user, target_user, request=None):
        if target_user.pk == requesting_user.pk:
            raise ValidationError("You cannot deactivate your own account")
        old_status = target_user.is_active
        target_user.is_active = not old_status
        target_user.save(update_fields=['is_active', 'updated_at'])
        AuditService.log_status_change(target_user, requesting_user, old_status, target_user.is_active, request)
        logger.info(
            "User %s %s by %s",
            target_user.email, 'activated' if target_user.is_active else 'deactivated', requesting_user.email
        )
        return target_user

    @staticmethod
    def reset_password(requesting_user, target_user, temporary_password, request=None):
        target_user.set_password(temporary_password)
        target_user.save(update_fields=['password', 'updated_at'])
        AuditService.log_password_reset(target_user, requesting_user, request)
        logger.info("Temporary password set for %s by %s", target_user.email, requesting_user.email)
        return target_user

    @staticmethod
    @transaction.atomic
    def delete_user(requesting_user, target_user, request=None):
        """
        Raises:
            PermissionDenied: super admin target (enforced by the model)
            ValidationError: deleting your own account
        """
        if target_user.pk == requesting_user.pk:
            raise ValidationError("You cannot delete your own account")
        if target_user.is_super_admin():
            raise PermissionDenied("Cannot delete super admin user. Super admin is protected from deletion.")
        email = target_user.email
        AuditService.log_user_deleted(target_user, requesting_user, request)
        target_user.delete()
        logger.info("User %s deleted by %s", email, requesting_user.email)
