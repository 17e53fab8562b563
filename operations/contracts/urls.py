from django.urls import path
from . import views

app_name = 'contracts'

urlpatterns = [
    path('', views.contract_list, name='contract-list'),
    path('<int:pk>/', views.contract_detail, name='contract-detail'),
    path('<int:pk>/renew/', views.contract_renew, name='contract-renew'),

    # tariffs | cargo-details | storage-charges | special-conditions
    path('<int:pk>/<slug:kind>/', views.contract_children, name='contract-children'),
    path('<int:pk>/<slug:kind>/<int:child_id>/', views.contract_child_delete, name='contract-child-delete'),
]
