from django.urls import path
from . import views

app_name = 'ports'

urlpatterns = [
    # Port endpoints
    path('', views.port_list, name='port-list'),
    path('<int:pk>/', views.port_detail, name='port-detail'),
    path('<int:pk>/toggle-status/', views.port_toggle_status, name='port-toggle-status'),
    path('<int:pk>/terminals/', views.port_terminals, name='port-terminals'),
    path('<int:pk>/available-terminals/', views.port_available_terminals, name='port-available-terminals'),

    # Admin contact endpoints
    path('<int:pk>/contacts/', views.port_contacts, name='port-contacts'),
    path('contacts/verify/', views.contact_verify, name='contact-verify'),
    path('contacts/<int:pk>/', views.contact_detail, name='contact-detail'),
    path('contacts/<int:pk>/resend-verification/', views.contact_resend_verification,
         name='contact-resend-verification'),
]
