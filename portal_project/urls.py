"""
URL configuration for portal_project.

Every API endpoint lives under /api/. Each app ships its own urls module;
apps with more than one top-level resource ship one module per resource.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Authentication endpoints (login, logout, me, profile, password, tokens)
    path('api/auth/', include('core.user_accounts.auth_urls')),

    # User administration
    path('api/users/', include('core.user_accounts.urls')),

    # Roles, menus and role-creation permissions
    path('api/', include('core.roles.urls')),

    path('api/notifications/', include('core.notifications.urls')),

    # Port operations
    path('api/organizations/', include('operations.organizations.urls')),
    path('api/ports/', include('operations.ports.urls')),
    path('api/terminals/', include('operations.terminals.urls')),
    path('api/subscription-types/', include('operations.terminals.subscription_urls')),
    path('api/customers/', include('operations.contracts.customer_urls')),
    path('api/contracts/', include('operations.contracts.urls')),
]
