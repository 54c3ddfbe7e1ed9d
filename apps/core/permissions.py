# apps/core/permissions.py

from functools import wraps

from django.http import JsonResponse


class PermissoesDashboard:
    """
    Regras de acesso do Fluxo Board

    Não há compartilhamento: cada registro pertence a um único usuário
    e só ele pode vê-lo ou alterá-lo.
    """

    @staticmethod
    def e_dono(user, registro):
        """Verifica se o registro pertence ao usuário"""
        return user.is_authenticated and registro.usuario_id == user.pk

    @staticmethod
    def tem_acesso_board(user, board):
        return PermissoesDashboard.e_dono(user, board)

    @staticmethod
    def pode_mover_tarefa(user, tarefa):
        return PermissoesDashboard.e_dono(user, tarefa)

    @staticmethod
    def pode_sincronizar_crm(user, usuario_id):
        """Só é possível sincronizar os próprios dados"""
        if not user.is_authenticated:
            return False
        return str(user.pk) == str(usuario_id)


# Decoradores para views

def ajax_login_requerido(view_func):
    """
    Decorador para views JSON
    Retorna 401 ao invés de redirecionar para o login
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'success': False, 'error': 'Autenticação necessária'}, status=401)
        return view_func(request, *args, **kwargs)

    return wrapped_view


def requer_acesso_board(view_func):
    """
    Decorador que verifica acesso ao board
    Espera que a view receba board_id como parâmetro
    """

    @wraps(view_func)
    def wrapped_view(request, board_id, *args, **kwargs):
        from .models import Board

        try:
            board = Board.objects.get(id=board_id)
        except Board.DoesNotExist:
            return JsonResponse({'success': False, 'error': 'Board não encontrado'}, status=404)

        if not PermissoesDashboard.tem_acesso_board(request.user, board):
            return JsonResponse({'success': False, 'error': 'Board não encontrado'}, status=404)

        # Adiciona o board ao request para uso na view
        request.board = board
        return view_func(request, board_id, *args, **kwargs)

    return wrapped_view
