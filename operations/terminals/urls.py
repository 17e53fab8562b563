from django.urls import path
from . import views

app_name = 'terminals'

urlpatterns = [
    # Terminal endpoints
    path('', views.terminal_list, name='terminal-list'),
    path('pending-activation/', views.terminal_pending_activation, name='terminal-pending-activation'),
    path('<int:pk>/', views.terminal_detail, name='terminal-detail'),

    # Activation workflow
    path('<int:pk>/activate/', views.terminal_activate, name='terminal-activate'),
    path('<int:pk>/suspend/', views.terminal_suspend, name='terminal-suspend'),
    path('<int:pk>/activation-log/', views.terminal_activation_log, name='terminal-activation-log'),
]
