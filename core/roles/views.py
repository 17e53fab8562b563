"""
API Views for roles, menus and role creation permissions.
"""
from django.core.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from portal_project.pagination import auto_paginate
from portal_project.response_formatter import validation_error_response
from .core_config import PermissionSections, UsersAccessSubsections
from .decorators import require_permission
from .models import Menu, Role, RoleCreationPermission
from .navigation import build_menu_tree, find_expanded_parents
from .permissions import format_requirement, user_has_permission
from .serializers import (
    MenuOrderSerializer,
    MenuSerializer,
    RoleCreationPermissionSerializer,
    RoleSerializer,
)
from .services import MenuService, RoleCreationPermissionService, RoleService

USERS_ACCESS = PermissionSections.USERS_ACCESS
MENU_MANAGEMENT = PermissionSections.MENU_MANAGEMENT


# ============================================================================
# Role Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(USERS_ACCESS, UsersAccessSubsections.ROLES)
@auto_paginate
def role_list(request):
    """
    List all roles or create a new role.

    GET /api/roles/
    - Filters: ?search=, ?is_active=

    POST /api/roles/
    - Request body: { "name", "display_name", "description", "permissions": [...] }
    """
    if request.method == 'GET':
        roles = RoleService.list_roles(request.query_params)
        serializer = RoleSerializer(roles, many=True)
        return Response(serializer.data)

    elif request.method == 'POST':
        serializer = RoleSerializer(data=request.data)
        if serializer.is_valid():
            try:
                role = RoleService.create_role(request.user, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(RoleSerializer(role).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(USERS_ACCESS, UsersAccessSubsections.ROLES)
def role_detail(request, pk):
    """
    Retrieve, update or delete a role.
    A role assigned to users cannot be deleted.
    """
    role = get_object_or_404(Role, pk=pk)

    if request.method == 'GET':
        return Response(RoleSerializer(role).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = RoleSerializer(role, data=request.data, partial=partial)
        if serializer.is_valid():
            try:
                role = RoleService.update_role(request.user, role, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(RoleSerializer(role).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    elif request.method == 'DELETE':
        try:
            RoleService.delete_role(request.user, role)
        except ValidationError as e:
            return validation_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH'])
@require_permission(USERS_ACCESS, UsersAccessSubsections.ROLES)
def role_toggle_status(request, pk):
    """
    PATCH /api/roles/<id>/toggle-status/
    """
    role = get_object_or_404(Role, pk=pk)
    RoleService.toggle_role(request.user, role)
    return Response(RoleSerializer(role).data)


@api_view(['GET'])
@require_permission(USERS_ACCESS, UsersAccessSubsections.ROLES)
@auto_paginate
def role_users(request, pk):
    """
    GET /api/roles/<id>/users/ - users holding this role
    """
    from core.user_accounts.serializers import UserListSerializer

    role = get_object_or_404(Role, pk=pk)
    users = role.users.select_related('user_type', 'role', 'port').order_by('email')
    return Response(UserListSerializer(users, many=True).data)


# ============================================================================
# Menu Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(MENU_MANAGEMENT)
@auto_paginate
def menu_list(request):
    """
    List all menus or create a new one.

    GET /api/menus/
    - Filters: ?menu_type=glink|plink, ?parent_id=, ?is_active=, ?search=

    POST /api/menus/
    - Request body: { "name", "label", "icon", "route", "menu_type", "parent", "sort_order" }
    """
    if request.method == 'GET':
        menus = MenuService.list_menus(request.query_params)
        return Response(MenuSerializer(menus, many=True).data)

    elif request.method == 'POST':
        serializer = MenuSerializer(data=request.data)
        if serializer.is_valid():
            try:
                menu = MenuService.create_menu(request.user, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(MenuSerializer(menu).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(MENU_MANAGEMENT)
def menu_detail(request, pk):
    """
    Retrieve, update or delete a menu.
    A GLink with child menus cannot be deleted.
    """
    menu = get_object_or_404(Menu, pk=pk)

    if request.method == 'GET':
        return Response(MenuSerializer(menu).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = MenuSerializer(menu, data=request.data, partial=partial)
        if serializer.is_valid():
            try:
                menu = MenuService.update_menu(request.user, menu, serializer.validated_data)
            except ValidationError as e:
                return validation_error_response(e)
            return Response(MenuSerializer(menu).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    elif request.method == 'DELETE':
        try:
            MenuService.delete_menu(request.user, menu)
        except ValidationError as e:
            return validation_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH'])
@require_permission(MENU_MANAGEMENT)
def menu_toggle_status(request, pk):
    """
    PATCH /api/menus/<id>/toggle-status/
    """
    menu = get_object_or_404(Menu, pk=pk)
    MenuService.toggle_menu(request.user, menu)
    return Response(MenuSerializer(menu).data)


@api_view(['POST'])
@require_permission(MENU_MANAGEMENT)
def menu_bulk_update_order(request):
    """
    POST /api/menus/bulk-update-order/
    - Request body: { "items": [{"id": 1, "sort_order": 3}, ...] }
      (a bare list is accepted too)
    - All-or-nothing: an unknown id rejects the whole batch
    """
    payload = {'items': request.data} if isinstance(request.data, list) else request.data
    serializer = MenuOrderSerializer(data=payload)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        menus = MenuService.bulk_update_order(request.user, serializer.validated_data['items'])
    except ValidationError as e:
        return validation_error_response(e)

    return Response(MenuSerializer(menus, many=True).data)


@api_view(['GET'])
@require_permission(MENU_MANAGEMENT)
def glink_list(request):
    """
    GET /api/menus/glinks/ - all GLinks ordered for the menu editor
    """
    glinks = Menu.objects.filter(menu_type=Menu.MenuType.GLINK).order_by('sort_order', 'name')
    return Response(MenuSerializer(glinks, many=True).data)


@api_view(['GET'])
@require_permission(MENU_MANAGEMENT)
def glink_plinks(request, pk):
    """
    GET /api/menus/glinks/<id>/plinks/ - PLinks of a GLink
    """
    glink = get_object_or_404(Menu, pk=pk, menu_type=Menu.MenuType.GLINK)
    plinks = glink.children.order_by('sort_order', 'name')
    return Response(MenuSerializer(plinks, many=True).data)


@api_view(['GET'])
def menu_tree(request):
    """
    Navigation tree for the current user.

    GET /api/menus/tree/?section=<active section>&path=<current route>
    - Returns: { "tree": [...], "expanded": [parent ids] }
    """
    tree = build_menu_tree(request.user)
    expanded = find_expanded_parents(
        tree,
        active_section=request.query_params.get('section'),
        current_path=request.query_params.get('path', ''),
    )
    return Response({'tree': tree, 'expanded': sorted(expanded)})


# ============================================================================
# Role Creation Permission Views
# ============================================================================

@api_view(['GET', 'POST'])
@require_permission(USERS_ACCESS, UsersAccessSubsections.ROLE_CREATION)
@auto_paginate
def role_creation_permission_list(request):
    """
    List or create role creation permissions.

    POST /api/role-creation-permissions/
    - Request body: { "creator_role", "allowed_user_types": [...], "allowed_roles": [ids], "is_active" }
    """
    if request.method == 'GET':
        configs = (
            RoleCreationPermission.objects
            .select_related('creator_role')
            .prefetch_related('allowed_roles')
        )
        return Response(RoleCreationPermissionSerializer(configs, many=True).data)

    elif request.method == 'POST':
        serializer = RoleCreationPermissionSerializer(data=request.data)
        if serializer.is_valid():
            try:
                config = RoleCreationPermissionService.create(request.user, dict(serializer.validated_data))
            except ValidationError as e:
                return validation_error_response(e)
            return Response(RoleCreationPermissionSerializer(config).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_permission(USERS_ACCESS, UsersAccessSubsections.ROLE_CREATION)
def role_creation_permission_detail(request, pk):
    """
    Retrieve, update or delete a role creation permission.
    """
    config = get_object_or_404(RoleCreationPermission, pk=pk)

    if request.method == 'GET':
        return Response(RoleCreationPermissionSerializer(config).data)

    elif request.method in ['PUT', 'PATCH']:
        partial = request.method == 'PATCH'
        serializer = RoleCreationPermissionSerializer(config, data=request.data, partial=partial)
        if serializer.is_valid():
            try:
                config = RoleCreationPermissionService.update(
                    request.user, config, dict(serializer.validated_data)
                )
            except ValidationError as e:
                return validation_error_response(e)
            return Response(RoleCreationPermissionSerializer(config).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    elif request.method == 'DELETE':
        config.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
def role_creation_permission_by_creator(request, role_id):
    """
    GET /api/role-creation-permissions/creator/<role_id>/
    - Any authenticated user may read the configuration of their own role;
      other roles need users-access:role-creation:read
    - 404 when the role has no configuration
    """
    if request.user.role_id != role_id and not user_has_permission(
        request.user, USERS_ACCESS, UsersAccessSubsections.ROLE_CREATION
    ):
        required = format_requirement(USERS_ACCESS, UsersAccessSubsections.ROLE_CREATION)
        return Response(
            {'error': f"Access denied. Required permission: {required}"},
            status=status.HTTP_403_FORBIDDEN
        )

    config = get_object_or_404(RoleCreationPermission, creator_role_id=role_id)
    return Response(RoleCreationPermissionSerializer(config).data)
