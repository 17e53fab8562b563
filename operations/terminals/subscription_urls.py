from django.urls import path
from . import views

app_name = 'subscription_types'

urlpatterns = [
    path('', views.subscription_type_list, name='subscription-type-list'),
]
