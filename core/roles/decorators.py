"""
Permission decorators for function-based views.

Place them under @api_view so DRF has already authenticated the request:

    @api_view(['GET', 'POST'])
    @require_permission('ports')
    @auto_paginate
    def port_list(request):
        ...
"""
import logging
from functools import wraps

from rest_framework import status
from rest_framework.response import Response

from .core_config import PermissionLevels, SYSTEM_ADMIN_ROLE_NAMES
from .permissions import PermissionCheck, format_requirement, user_has_permission

logger = logging.getLogger(__name__)


def _authentication_required():
    return Response(
        {'error': 'Authentication required'},
        status=status.HTTP_401_UNAUTHORIZED
    )


def _forbidden(request, message):
    logger.warning(
        "Permission denied for %s on %s %s: %s",
        getattr(request.user, 'email', 'anonymous'), request.method, request.path, message
    )
    return Response({'error': message}, status=status.HTTP_403_FORBIDDEN)


def _as_check(item, method):
    """Accept PermissionCheck, (section,), (section, subsection) or (section, subsection, level)."""
    if isinstance(item, PermissionCheck):
        check = item
    elif isinstance(item, str):
        check = PermissionCheck(section=item, level=None)
    else:
        check = PermissionCheck(*item) if len(item) == 3 else PermissionCheck(*item, level=None)
    if check.level is None:
        check = PermissionCheck(check.section, check.subsection, _get_level_from_method(method))
    return check


def require_permission(section, subsection=None, level=None):
    """
    Decorator to check a section[:subsection]:level permission.

    Args:
        section: Permission section (e.g. 'terminals')
        subsection: Optional subsection (e.g. 'users' under 'users-access')
        level: 'read' | 'write' | 'manage'. If None, derived from the HTTP method

    Usage:
        # Explicit level
        @api_view(['PUT'])
        @require_permission('terminal-activation', level='manage')
        def terminal_activate(request, pk):
            ...

        # Level from method: GET = read, POST/PUT/PATCH = write, DELETE = manage
        @api_view(['GET', 'POST'])
        @require_permission('users-access', 'users')
        def user_list(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user or not request.user.is_authenticated:
                return _authentication_required()

            determined_level = level or _get_level_from_method(request.method)

            if not user_has_permission(request.user, section, subsection, determined_level):
                return _forbidden(
                    request,
                    f"Access denied. Required permission: "
                    f"{format_requirement(section, subsection, determined_level)}"
                )

            return view_func(request, *args, **kwargs)

        # Metadata for introspection/documentation
        wrapper.permission_section = section
        wrapper.permission_subsection = subsection
        wrapper.permission_level = level

        return wrapper
    return decorator


def require_all_permissions(*checks):
    """
    Decorator that checks if user has ALL of the specified permissions (AND logic).

    Usage:
        @api_view(['GET'])
        @require_all_permissions(('terminals', None, 'read'), ('contracts', None, 'read'))
        def terminal_contract_report(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user or not request.user.is_authenticated:
                return _authentication_required()

            resolved = [_as_check(c, request.method) for c in checks]
            if not all(user_has_permission(request.user, c.section, c.subsection, c.level) for c in resolved):
                required = ', '.join(str(c) for c in resolved)
                return _forbidden(request, f"Access denied. Required permissions: {required}")

            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


def require_any_permission(*checks):
    """
    Decorator that checks if user has ANY of the specified permissions (OR logic).

    Usage:
        @api_view(['GET'])
        @require_any_permission(('terminals', None, 'read'), ('terminal-activation', None, 'read'))
        def terminal_lookup(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user or not request.user.is_authenticated:
                return _authentication_required()

            resolved = [_as_check(c, request.method) for c in checks]
            if not any(user_has_permission(request.user, c.section, c.subsection, c.level) for c in resolved):
                required = ' OR '.join(str(c) for c in resolved)
                return _forbidden(request, f"Access denied. Required permissions (any): {required}")

            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


def require_system_admin(view_func):
    """Decorator restricting a view to system administrators."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = request.user
        if not user or not user.is_authenticated:
            return _authentication_required()

        if not user.is_system_admin() and user.role_name not in SYSTEM_ADMIN_ROLE_NAMES:
            return _forbidden(request, 'System administrator access required')

        return view_func(request, *args, **kwargs)
    return wrapper


def require_role(*role_names):
    """
    Decorator restricting a view to users holding one of the named roles.

    Usage:
        @api_view(['GET'])
        @require_role('SystemAdmin', 'PortAdmin')
        def port_admin_dashboard(request):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user or not request.user.is_authenticated:
                return _authentication_required()

            if request.user.role_name not in role_names:
                return _forbidden(request, f"Access denied. Required roles: {', '.join(role_names)}")

            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


def _get_level_from_method(http_method):
    """Map HTTP method to permission level"""
    method_level_map = {
        'GET': PermissionLevels.READ,
        'HEAD': PermissionLevels.READ,
        'OPTIONS': PermissionLevels.READ,
        'POST': PermissionLevels.WRITE,
        'PUT': PermissionLevels.WRITE,
        'PATCH': PermissionLevels.WRITE,
        'DELETE': PermissionLevels.MANAGE,
    }
    return method_level_map.get(http_method, PermissionLevels.READ)
