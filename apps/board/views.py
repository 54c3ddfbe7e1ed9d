# apps/board/views.py

import json
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from apps.core.models import Board, Tarefa
from apps.core.permissions import PermissoesDashboard, ajax_login_requerido, requer_acesso_board
from apps.core.utils import agrupar_em_colunas, serializar_tarefa

logger = logging.getLogger(__name__)


@login_required
def dashboard_view(request):
    """
    Entrada do dashboard
    Abre o board mais recente do usuário
    """
    board = Board.objects.filter(usuario=request.user).first()
    if board is not None:
        return redirect('board:kanban', board_id=board.id)

    return render(request, 'board/kanban.html', {
        'title': 'Fluxo Board',
        'board': None,
        'boards': [],
        'colunas': agrupar_em_colunas([]),
    })


@login_required
@requer_acesso_board
def board_kanban_view(request, board_id):
    """
    View principal do Kanban Board
    O estado ao vivo chega depois pelo WebSocket (ws/board/)
    """
    board = request.board  # Injetado pelo decorator

    tarefas = Tarefa.objects.filter(board=board, usuario=request.user).order_by('-criado_em', '-id')
    colunas = agrupar_em_colunas(tarefas, board.id)

    context = {
        'title': f'{board.nome} - Kanban',
        'board': board,
        'boards': Board.objects.filter(usuario=request.user),
        'colunas': colunas,
    }

    # Requisições HTMX recebem só as colunas
    if request.htmx:
        return render(request, 'board/partials/colunas.html', context)

    return render(request, 'board/kanban.html', context)


@ajax_login_requerido
@require_POST
@csrf_exempt  # Para HTMX/AJAX requests
def mover_tarefa_ajax(request):
    """
    Move tarefa para outra coluna via AJAX
    Alternativa HTTP ao drag-and-drop pelo WebSocket
    """
    try:
        data = json.loads(request.body)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'JSON inválido'}, status=400)

    task_id = data.get('task_id')
    novo_status = data.get('status')

    # Validar parâmetros
    if not task_id or not novo_status:
        return JsonResponse({'success': False, 'error': 'Parâmetros inválidos'}, status=400)

    if novo_status not in Tarefa.status_validos():
        return JsonResponse({'success': False, 'error': f'Status inválido: {novo_status}'}, status=400)

    try:
        tarefa = Tarefa.objects.get(id=task_id)
    except (Tarefa.DoesNotExist, TypeError, ValueError):
        return JsonResponse({'success': False, 'error': 'Tarefa não encontrada'}, status=404)

    # Tarefas de outros usuários são tratadas como inexistentes
    if not PermissoesDashboard.pode_mover_tarefa(request.user, tarefa):
        return JsonResponse({'success': False, 'error': 'Tarefa não encontrada'}, status=404)

    status_anterior = tarefa.status
    tarefa.status = novo_status
    tarefa.save(update_fields=['status', 'atualizado_em'])

    logger.info(f"🔄 Tarefa {tarefa.id} movida de '{status_anterior}' para '{novo_status}' via HTTP")

    # Enviar atualização via WebSocket
    channel_layer = get_channel_layer()
    async_to_sync(channel_layer.group_send)(
        f'usuario_{request.user.id}',
        {
            'type': 'item_moved',
            'message': {
                'task_id': tarefa.id,
                'titulo': tarefa.titulo,
                'status_anterior': status_anterior,
                'novo_status': novo_status,
                'timestamp': timezone.now().isoformat()
            }
        }
    )

    return JsonResponse({
        'success': True,
        'message': f'Tarefa movida para {tarefa.get_status_display()}',
        'tarefa': serializar_tarefa(tarefa),
    })
