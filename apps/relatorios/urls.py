# apps/relatorios/urls.py

from django.urls import path
from . import views

app_name = 'relatorios'

urlpatterns = [
    # APIs para dashboards
    path('api/resumo/', views.api_resumo, name='api_resumo'),
]
