# apps/crm/views.py

import json
import logging
import traceback

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.permissions import PermissoesDashboard

from .cliente import ClienteMethodCRM
from .exceptions import ErroConfiguracaoCRM
from .servico import ServicoSyncCRM

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}


def _com_cors(response):
    for nome, valor in CORS_HEADERS.items():
        response[nome] = valor
    return response


def _resposta_erro(erro, status=500):
    corpo = {
        'error': str(erro),
        'timestamp': timezone.now().isoformat(),
    }
    if settings.DEBUG:
        corpo['details'] = ''.join(traceback.format_exception(type(erro), erro, erro.__traceback__))
    return _com_cors(JsonResponse(corpo, status=status))


async def _executar(acao, dados, usuario_id):
    """Um cliente HTTP por invocação, sempre fechado no final"""
    cliente = ClienteMethodCRM.de_settings()
    try:
        return await ServicoSyncCRM(cliente).processar(acao, dados, usuario_id)
    finally:
        await cliente.aclose()


@csrf_exempt
@require_http_methods(["POST", "OPTIONS"])
def method_crm_sync(request):
    """
    Endpoint de sincronização com o Method CRM

    Body: {"action": ..., "data": {...}, "user_id": ...}
    Ações: sync_contacts, sync_tasks, create_activity, create_contact
    """
    if request.method == 'OPTIONS':
        return _com_cors(HttpResponse())

    if not request.user.is_authenticated:
        return _com_cors(JsonResponse({'error': 'Autenticação necessária'}, status=401))

    if not getattr(settings, 'METHOD_CRM_API_KEY', ''):
        logger.error("❌ METHOD_CRM_API_KEY não configurada")
        return _resposta_erro(ErroConfiguracaoCRM('Method CRM API key not configured'))

    try:
        corpo = json.loads(request.body)
        if not isinstance(corpo, dict):
            raise ValueError('Request body must be a JSON object')
        if not corpo.get('user_id'):
            raise ValueError('User ID is required')
    except ValueError as e:
        logger.warning(f"⚠️ Requisição inválida para o Method CRM: {e}")
        return _resposta_erro(e, status=400)

    usuario_id = corpo['user_id']
    acao = corpo.get('action')

    if not PermissoesDashboard.pode_sincronizar_crm(request.user, usuario_id):
        logger.warning(f"❌ {request.user.username} tentou sincronizar dados do usuário {usuario_id}")
        return _com_cors(JsonResponse({'error': 'Sem permissão para sincronizar este usuário'}, status=403))

    logger.info(f"⚙️ Method CRM: ação '{acao}' para usuário {usuario_id}")

    try:
        resultado = async_to_sync(_executar)(acao, corpo.get('data'), usuario_id)
    except Exception as e:
        logger.exception(f"❌ Erro no endpoint method-crm-sync: {e}")
        return _resposta_erro(e)

    return _com_cors(JsonResponse(resultado))
