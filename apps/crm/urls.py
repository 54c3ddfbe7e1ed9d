# apps/crm/urls.py

from django.urls import path
from . import views

app_name = 'crm'

urlpatterns = [
    path('method-sync/', views.method_crm_sync, name='method_sync'),
]
