# apps/core/views.py

"""
API JSON de boards, tarefas e contatos

As views usam os mesmos stores da sessão WebSocket; as notificações
geradas pelo store voltam no campo `notificacoes` da resposta.
"""

import json
import logging

from asgiref.sync import async_to_sync
from django.core.cache import cache
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps import __version__

from .models import Usuario
from .notificacoes import Notificador
from .permissions import ajax_login_requerido
from .stores import BoardStore, ContatoStore, TarefaStore
from .utils import serializar_board, serializar_contato, serializar_tarefa

logger = logging.getLogger(__name__)


def _ler_json(request):
    """Corpo JSON da requisição ou None se inválido"""
    try:
        dados = json.loads(request.body or b'{}')
    except ValueError:
        return None
    return dados if isinstance(dados, dict) else None


def _resposta(notificador, status=200, **dados):
    dados['notificacoes'] = [n.como_dict() for n in notificador.consumir()]
    return JsonResponse(dados, status=status)


def _json_invalido():
    return JsonResponse({'success': False, 'error': 'JSON inválido'}, status=400)


def _colecao(request, store, serializar, chave):
    """GET lista / POST cria"""
    notificador = store.notificador

    if request.method == 'GET':
        async_to_sync(store.buscar)()
        return _resposta(
            notificador,
            success=not notificador.tem_erros(),
            **{chave + 's': [serializar(item) for item in store.itens]}
        )

    dados = _ler_json(request)
    if dados is None:
        return _json_invalido()

    registro = async_to_sync(store.criar)(dados)
    if registro is None:
        return _resposta(notificador, status=400, success=False)
    return _resposta(notificador, status=201, success=True, **{chave: serializar(registro)})


def _detalhe(request, store, registro_id, serializar, chave):
    """PATCH altera campos / DELETE remove"""
    notificador = store.notificador

    if request.method == 'DELETE':
        excluido = async_to_sync(store.deletar)(registro_id)
        return _resposta(notificador, status=200 if excluido else 400, success=excluido)

    dados = _ler_json(request)
    if dados is None:
        return _json_invalido()

    registro = async_to_sync(store.atualizar)(registro_id, dados)
    if registro is None:
        return _resposta(notificador, status=400, success=False)
    return _resposta(notificador, success=True, **{chave: serializar(registro)})


# === BOARDS ===

@ajax_login_requerido
@csrf_exempt
@require_http_methods(["GET", "POST"])
def api_boards(request):
    store = BoardStore(request.user, Notificador())
    return _colecao(request, store, serializar_board, 'board')


@ajax_login_requerido
@csrf_exempt
@require_http_methods(["PATCH", "DELETE"])
def api_board_detalhe(request, board_id):
    store = BoardStore(request.user, Notificador())
    return _detalhe(request, store, board_id, serializar_board, 'board')


# === TAREFAS ===

@ajax_login_requerido
@csrf_exempt
@require_http_methods(["GET", "POST"])
def api_tarefas(request, board_id):
    """
    Tarefas de um board

    POST aceita "sincronizar_crm": true para replicar a tarefa no Method CRM.
    """
    notificador = Notificador()
    store = TarefaStore(request.user, notificador, board_id=board_id)

    if request.method == 'GET':
        return _colecao(request, store, serializar_tarefa, 'tarefa')

    dados = _ler_json(request)
    if dados is None:
        return _json_invalido()

    tarefa = async_to_sync(store.criar)(dados)
    if tarefa is None:
        return _resposta(notificador, status=400, success=False)

    sincronizada = None
    if dados.get('sincronizar_crm'):
        from apps.crm.integracao import IntegracaoCRM

        integracao = IntegracaoCRM(request.user, notificador)
        sincronizada = async_to_sync(integracao.criar_tarefa_no_crm)(tarefa)

    return _resposta(
        notificador,
        status=201,
        success=True,
        tarefa=serializar_tarefa(tarefa),
        sincronizada_crm=sincronizada,
    )


@ajax_login_requerido
@csrf_exempt
@require_http_methods(["PATCH", "DELETE"])
def api_tarefa_detalhe(request, tarefa_id):
    store = TarefaStore(request.user, Notificador())
    return _detalhe(request, store, tarefa_id, serializar_tarefa, 'tarefa')


# === CONTATOS ===

@ajax_login_requerido
@csrf_exempt
@require_http_methods(["GET", "POST"])
def api_contatos(request):
    store = ContatoStore(request.user, Notificador())
    return _colecao(request, store, serializar_contato, 'contato')


@ajax_login_requerido
@csrf_exempt
@require_http_methods(["PATCH", "DELETE"])
def api_contato_detalhe(request, contato_id):
    store = ContatoStore(request.user, Notificador())
    return _detalhe(request, store, contato_id, serializar_contato, 'contato')


# === MONITORAMENTO ===

@require_GET
def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        # Verificar conexão com banco
        Usuario.objects.exists()

        # Verificar cache (Redis em produção)
        cache.set('health_check', 'ok', 60)
        cache.get('health_check')

        status = {
            'status': 'healthy',
            'database': 'ok',
            'cache': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': __version__
        }

        return JsonResponse(status)

    except Exception as e:
        logger.error(f"❌ Health check falhou: {e}")
        status = {
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': __version__
        }

        return JsonResponse(status, status=500)
