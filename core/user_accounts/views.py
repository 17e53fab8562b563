"""
API Views for authentication, self-service profile and user administration.
"""
import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from django.core.exceptions import PermissionDenied, ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from core.roles.core_config import CoreRoles, PermissionLevels, PermissionSections, UsersAccessSubsections
from core.roles.decorators import require_permission
from core.roles.models import Role
from core.roles.role_creation import get_available_role_ids, get_available_user_types, get_creation_permission
from portal_project.pagination import auto_paginate
from portal_project.response_formatter import validation_error_response
from .serializers import (
    ChangePasswordSerializer,
    CurrentUserSerializer,
    LoginSerializer,
    PasswordResetSerializer,
    UserAuditLogSerializer,
    UserCreateSerializer,
    UserListSerializer,
    UserProfileSerializer,
    UserUpdateSerializer,
)
from .services import UserService

logger = logging.getLogger(__name__)

USERS_ACCESS = PermissionSections.USERS_ACCESS
USERS = UsersAccessSubsections.USERS


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token)
    }


def _forbidden(exc):
    return Response({'error': str(exc)}, status=status.HTTP_403_FORBIDDEN)


# ============================================================================
# Authentication Views
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    Public endpoint for user login.
    Authenticates user and returns JWT tokens.

    POST /api/auth/login/
    - Request body: { "email": "...", "password": "..." }
    - Returns: User data, JWT tokens and the page to open after login
    """
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    # Inactive users are rejected by the authentication backend
    user = authenticate(
        request,
        username=serializer.validated_data['email'],
        password=serializer.validated_data['password']
    )

    if user is None:
        logger.warning("Failed login attempt for %s", serializer.validated_data['email'])
        return Response(
            {'error': 'Invalid email or password'},
            status=status.HTTP_401_UNAUTHORIZED
        )

    update_last_login(None, user)
    logger.info("User %s logged in", user.email)

    return Response({
        'message': 'Login successful',
        'user': CurrentUserSerializer(user).data,
        'tokens': _tokens_for(user),
        'redirect_path': '/portal/welcome' if user.is_system_admin() else '/dashboard',
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """
    Blacklists the refresh token.

    POST /api/auth/logout/
    - Request body: { "refresh": "..." }
    """
    refresh_token = request.data.get('refresh')
    if not refresh_token:
        return Response(
            {'error': 'Refresh token is required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    logger.info("User %s logged out", request.user.email)
    return Response({'message': 'Logout successful'}, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    """
    GET /api/auth/me/
    - Returns: Current user with role, role_permissions, is_system_admin and permission_summary
    """
    return Response(CurrentUserSerializer(request.user).data)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def user_profile(request):
    """
    Authenticated endpoint for viewing and updating own profile.
    Cannot change email, user_type, role or port assignments.

    GET /api/auth/profile/
    PUT/PATCH /api/auth/profile/
    - Request body: { "first_name", "last_name", "phone_number" }
    """
    user = request.user

    if request.method == 'GET':
        serializer = UserProfileSerializer(user)
        return Response(serializer.data, status=status.HTTP_200_OK)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = UserProfileSerializer(user, data=request.data, partial=partial)

        if serializer.is_valid():
            serializer.save()
            return Response({
                'message': 'Profile updated successfully',
                'user': serializer.data
            }, status=status.HTTP_200_OK)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """
    Authenticated endpoint for changing own password.

    POST /api/auth/change-password/
    - Request body: { "old_password", "new_password", "confirm_password" }
    """
    serializer = ChangePasswordSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user = request.user

    if not user.check_password(serializer.validated_data['old_password']):
        return Response(
            {'error': 'Old password is incorrect'},
            status=status.HTTP_400_BAD_REQUEST
        )

    user.set_password(serializer.validated_data['new_password'])
    user.save()

    return Response({
        'message': 'Password changed successfully'
    }, status=status.HTTP_200_OK)


# ============================================================================
# User Management Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(USERS_ACCESS, USERS)
@auto_paginate
def user_list(request):
    """
    List or create users.

    GET /api/users/
    - Filters: ?user_type=, ?role=, ?port=, ?is_active=, ?search=
    - System admins see every user; others see the users of their port

    POST /api/users/
    - Request body: UserCreateSerializer fields
    - 403 when the user type or role is not allowed for the current user
    """
    if request.method == 'GET':
        users = UserService.list_users(request.user, request.query_params)
        return Response(UserListSerializer(users, many=True).data)

    elif request.method == 'POST':
        serializer = UserCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = UserService.create_user(request.user, serializer.validated_data, request)
        except PermissionDenied as e:
            return _forbidden(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(UserListSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(USERS_ACCESS, USERS)
def user_detail(request, pk):
    """
    Retrieve, update or delete a user visible to the current user.

    DELETE refuses the super admin (403) and your own account (400).
    """
    target_user = get_object_or_404(UserService.list_users(request.user, {}), pk=pk)

    if request.method == 'GET':
        return Response(UserListSerializer(target_user).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = UserUpdateSerializer(target_user, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            target_user = UserService.update_user(
                request.user, target_user, serializer.validated_data, request
            )
        except PermissionDenied as e:
            return _forbidden(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(UserListSerializer(target_user).data)

    elif request.method == 'DELETE':
        try:
            UserService.delete_user(request.user, target_user, request)
        except PermissionDenied as e:
            return _forbidden(e)
        except ValidationError as e:
            return validation_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH'])
@require_permission(USERS_ACCESS, USERS)
def user_toggle_status(request, pk):
    """
    PATCH /api/users/<id>/toggle-status/
    """
    target_user = get_object_or_404(UserService.list_users(request.user, {}), pk=pk)
    try:
        UserService.toggle_status(request.user, target_user, request)
    except ValidationError as e:
        return validation_error_response(e)
    return Response(UserListSerializer(target_user).data)


@api_view(['POST'])
@require_permission(USERS_ACCESS, USERS, level=PermissionLevels.MANAGE)
def user_reset_password(request, pk):
    """
    Set a temporary password for a user.

    POST /api/users/<id>/reset-password/
    - Request body: { "temporary_password" }
    """
    target_user = get_object_or_404(UserService.list_users(request.user, {}), pk=pk)
    serializer = PasswordResetSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    UserService.reset_password(
        request.user, target_user, serializer.validated_data['temporary_password'], request
    )
    return Response({
        'message': f'Temporary password set successfully for {target_user.email}'
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_permission(USERS_ACCESS, USERS)
@auto_paginate
def user_audit_logs(request, pk):
    """
    GET /api/users/<id>/audit-logs/ - newest first
    """
    target_user = get_object_or_404(UserService.list_users(request.user, {}), pk=pk)
    logs = target_user.audit_logs.select_related('performed_by')
    return Response(UserAuditLogSerializer(logs, many=True).data)


@api_view(['GET'])
@require_permission(USERS_ACCESS, USERS)
def user_creation_options(request):
    """
    User types and roles the current user may hand out.

    GET /api/users/creation-options/
    - Returns: { "user_types": [...], "roles": [{id, name, display_name}] }
    """
    user = request.user
    roles = Role.objects.filter(is_active=True).order_by('name')

    if user.is_system_admin() or (
        get_creation_permission(user) is None and user.role_name == CoreRoles.PORT_ADMIN
    ):
        roles = [role for role in roles if not role.is_system_admin_role]
    else:
        roles = roles.filter(pk__in=get_available_role_ids(user))

    return Response({
        'user_types': get_available_user_types(user),
        'roles': [
            {'id': role.id, 'name': role.name, 'display_name': role.display_name}
            for role in roles
        ],
    })
