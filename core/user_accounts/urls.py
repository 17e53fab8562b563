"""
URL Configuration for user administration.
Authentication and self-service endpoints are in auth_urls.py
"""
from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('', views.user_list, name='user-list'),
    path('creation-options/', views.user_creation_options, name='user-creation-options'),
    path('<int:pk>/', views.user_detail, name='user-detail'),
    path('<int:pk>/toggle-status/', views.user_toggle_status, name='user-toggle-status'),
    path('<int:pk>/reset-password/', views.user_reset_password, name='user-reset-password'),
    path('<int:pk>/audit-logs/', views.user_audit_logs, name='user-audit-logs'),
]
