# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Dashboard (abre o board mais recente)
    path('', views.dashboard_view, name='dashboard'),

    # Kanban principal
    path('<int:board_id>/', views.board_kanban_view, name='kanban'),

    # AJAX - Movimentação de tarefas
    path('mover-tarefa/', views.mover_tarefa_ajax, name='mover_tarefa'),
]
