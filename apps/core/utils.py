# apps/core/utils.py

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def colunas_padrao() -> List[Dict]:
    """Definição das três colunas fixas do Kanban (id = status)"""
    from .models import Tarefa

    return [{'id': status, 'titulo': titulo} for status, titulo in Tarefa.STATUS_CHOICES]


def agrupar_em_colunas(tarefas: Iterable, board_id: Optional[int] = None) -> List[Dict]:
    """
    Agrupa tarefas nas três colunas do board

    Cada tarefa aparece em exatamente uma coluna. A ordem relativa das
    tarefas dentro de cada coluna é a ordem da lista recebida.
    """
    tarefas = [t for t in tarefas if board_id is None or t.board_id == board_id]

    colunas = []
    for coluna in colunas_padrao():
        coluna['tarefas'] = [t for t in tarefas if t.status == coluna['id']]
        colunas.append(coluna)
    return colunas


def converter_data(valor) -> Optional[datetime]:
    """
    Converte o prazo recebido do cliente para datetime com timezone

    Aceita datetime, date ISO ("2024-12-28") ou datetime ISO.
    """
    if valor in (None, ''):
        return None
    if isinstance(valor, datetime):
        data = valor
    else:
        data = parse_datetime(str(valor))
        if data is None:
            dia = parse_date(str(valor))
            if dia is None:
                raise ValueError(f"Data inválida: {valor}")
            data = datetime(dia.year, dia.month, dia.day)

    if timezone.is_naive(data):
        data = timezone.make_aware(data)
    return data


def _iso(valor):
    return valor.isoformat() if valor else None


def serializar_board(board) -> Dict:
    return {
        'id': board.id,
        'nome': board.nome,
        'descricao': board.descricao,
        'cor': board.cor,
        'criado_em': _iso(board.criado_em),
        'atualizado_em': _iso(board.atualizado_em),
    }


def serializar_tarefa(tarefa) -> Dict:
    return {
        'id': tarefa.id,
        'titulo': tarefa.titulo,
        'descricao': tarefa.descricao,
        'status': tarefa.status,
        'prioridade': tarefa.prioridade,
        'prazo': _iso(tarefa.prazo),
        'lembrete': tarefa.lembrete,
        'atrasada': tarefa.esta_atrasada(),
        'board_id': tarefa.board_id,
        'criado_em': _iso(tarefa.criado_em),
        'atualizado_em': _iso(tarefa.atualizado_em),
    }


def serializar_contato(contato) -> Dict:
    return {
        'id': contato.id,
        'nome': contato.nome,
        'email': contato.email,
        'telefone': contato.telefone,
        'empresa': contato.empresa,
        'method_crm_id': contato.method_crm_id,
        'criado_em': _iso(contato.criado_em),
        'atualizado_em': _iso(contato.atualizado_em),
    }


def serializar_registro_sync(registro) -> Dict:
    return {
        'id': registro.id,
        'tipo_entidade': registro.tipo_entidade,
        'entidade_id': registro.entidade_id,
        'method_crm_id': registro.method_crm_id,
        'status_sync': registro.status_sync,
        'mensagem_erro': registro.mensagem_erro,
        'ultima_sync': _iso(registro.ultima_sync),
        'criado_em': _iso(registro.criado_em),
    }


def serializar_colunas(colunas: List[Dict]) -> List[Dict]:
    return [
        {
            'id': coluna['id'],
            'titulo': coluna['titulo'],
            'total': len(coluna['tarefas']),
            'tarefas': [serializar_tarefa(t) for t in coluna['tarefas']],
        }
        for coluna in colunas
    ]

