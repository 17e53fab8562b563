from django.urls import path
from . import views

app_name = 'customers'

urlpatterns = [
    path('', views.customer_list, name='customer-list'),
    path('<int:pk>/', views.customer_detail, name='customer-detail'),
    path('<int:pk>/contracts/', views.customer_contracts, name='customer-contracts'),
]
