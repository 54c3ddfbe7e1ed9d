# apps/core/middleware.py

from django.http import JsonResponse

from .models import Board


class IsolamentoUsuarioMiddleware:
    """
    Middleware que garante isolamento de dados entre usuários

    Atua como uma segunda camada de proteção: qualquer rota que receba
    board_id só é executada se o board pertencer ao usuário logado
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if hasattr(request, 'user') and request.user.is_authenticated:
            response['X-Fluxo-User'] = str(request.user.pk)

        return response

    def process_view(self, request, view_func, view_args, view_kwargs):
        """
        Verificar acesso ao board antes da view ser executada
        """
        if not hasattr(request, 'user') or not request.user.is_authenticated:
            return None  # Deixar sistema de auth padrão lidar com isso

        if 'board_id' in view_kwargs:
            existe = Board.objects.filter(id=view_kwargs['board_id'], usuario=request.user).exists()
            if not existe:
                return JsonResponse({'success': False, 'error': 'Board não encontrado'}, status=404)

        return None
