# apps/relatorios/views.py

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from apps.core.permissions import ajax_login_requerido

from .utils import calcular_resumo_usuario


@ajax_login_requerido
@require_GET
def api_resumo(request):
    """
    API com as estatísticas da visão geral do dashboard
    """
    resumo = calcular_resumo_usuario(request.user)
    resumo['gerado_em'] = timezone.now().isoformat()
    return JsonResponse(resumo)
