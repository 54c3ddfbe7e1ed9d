# apps/core/urls.py

from django.contrib.auth import views as auth_views
from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # === AUTENTICAÇÃO ===
    path('login/', auth_views.LoginView.as_view(template_name='core/login.html'), name='login'),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),

    # === MONITORAMENTO ===
    path('health/', views.health_check, name='health'),

    # === API JSON ===
    path('api/boards/', views.api_boards, name='api_boards'),
    path('api/boards/<int:board_id>/', views.api_board_detalhe, name='api_board_detalhe'),
    path('api/boards/<int:board_id>/tarefas/', views.api_tarefas, name='api_tarefas'),
    path('api/tarefas/<int:tarefa_id>/', views.api_tarefa_detalhe, name='api_tarefa_detalhe'),
    path('api/contatos/', views.api_contatos, name='api_contatos'),
    path('api/contatos/<int:contato_id>/', views.api_contato_detalhe, name='api_contato_detalhe'),
]
