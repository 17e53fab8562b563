from django.urls import path
from . import views

app_name = 'organizations'

urlpatterns = [
    path('', views.organization_list, name='organization-list'),
    path('<int:pk>/', views.organization_detail, name='organization-detail'),
    path('<int:pk>/toggle-status/', views.organization_toggle_status, name='organization-toggle-status'),
    path('<int:pk>/ports/', views.organization_ports, name='organization-ports'),
]
