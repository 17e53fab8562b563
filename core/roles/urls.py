"""
URL Configuration for Roles app.
Handles roles, navigation menus and role creation permissions.
Mounted under /api/.
"""
from django.urls import path
from . import views

app_name = 'roles'

urlpatterns = [
    # Role endpoints
    path('roles/', views.role_list, name='role-list'),
    path('roles/<int:pk>/', views.role_detail, name='role-detail'),
    path('roles/<int:pk>/toggle-status/', views.role_toggle_status, name='role-toggle-status'),
    path('roles/<int:pk>/users/', views.role_users, name='role-users'),

    # Menu endpoints
    path('menus/', views.menu_list, name='menu-list'),
    path('menus/tree/', views.menu_tree, name='menu-tree'),
    path('menus/bulk-update-order/', views.menu_bulk_update_order, name='menu-bulk-update-order'),
    path('menus/glinks/', views.glink_list, name='glink-list'),
    path('menus/glinks/<int:pk>/plinks/', views.glink_plinks, name='glink-plinks'),
    path('menus/<int:pk>/', views.menu_detail, name='menu-detail'),
    path('menus/<int:pk>/toggle-status/', views.menu_toggle_status, name='menu-toggle-status'),

    # Role creation permission endpoints
    path('role-creation-permissions/', views.role_creation_permission_list,
         name='role-creation-permission-list'),
    path('role-creation-permissions/<int:pk>/', views.role_creation_permission_detail,
         name='role-creation-permission-detail'),
    path('role-creation-permissions/creator/<int:role_id>/', views.role_creation_permission_by_creator,
         name='role-creation-permission-by-creator'),
]
