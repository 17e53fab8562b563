"""
URL Configuration for Authentication endpoints.
Handles login, logout, the current user, password changes and token refresh.
User administration endpoints are in urls.py
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

app_name = 'auth'

urlpatterns = [
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('me/', views.me, name='me'),
    path('profile/', views.user_profile, name='profile'),

    # Password management
    path('change-password/', views.change_password, name='change_password'),

    # Token management
    path('refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
