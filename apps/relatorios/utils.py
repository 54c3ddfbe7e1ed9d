# apps/relatorios/utils.py

from datetime import timedelta
from typing import Dict

from django.db.models import Count, Q
from django.utils import timezone

from apps.core.models import Contato, RegistroSync, Tarefa


def calcular_distribuicao_status(usuario) -> Dict[str, int]:
    """Quantidade de tarefas do usuário em cada coluna"""
    contagem = dict(
        Tarefa.objects.filter(usuario=usuario)
        .order_by()
        .values_list('status')
        .annotate(total=Count('id'))
    )
    return {status: contagem.get(status, 0) for status in Tarefa.status_validos()}


def calcular_resumo_usuario(usuario, limite_proximas: int = 4) -> Dict:
    """
    Estatísticas do painel de visão geral

    Tarefas concluídas não contam como ativas, vencendo hoje ou atrasadas.
    "Hoje" e "este mês" seguem o fuso configurado em TIME_ZONE.
    """
    agora = timezone.now()
    inicio_dia = timezone.localtime(agora).replace(hour=0, minute=0, second=0, microsecond=0)
    fim_dia = inicio_dia + timedelta(days=1)
    inicio_mes = inicio_dia.replace(day=1)

    ativas = Tarefa.objects.filter(usuario=usuario).exclude(status='done')
    contagem_tarefas = ativas.aggregate(
        total=Count('id'),
        vencendo_hoje=Count('id', filter=Q(prazo__gte=inicio_dia, prazo__lt=fim_dia)),
        atrasadas=Count('id', filter=Q(prazo__lt=agora)),
    )

    contagem_contatos = Contato.objects.filter(usuario=usuario).aggregate(
        total=Count('id'),
        novos_mes=Count('id', filter=Q(criado_em__gte=inicio_mes)),
    )

    contagem_sync = RegistroSync.objects.filter(usuario=usuario).aggregate(
        sucesso=Count('id', filter=Q(status_sync='synced')),
        erros=Count('id', filter=Q(status_sync='error')),
    )

    proximas = ativas.filter(prazo__gte=agora).order_by('prazo')[:limite_proximas]

    return {
        'tarefas_ativas': contagem_tarefas['total'],
        'vencendo_hoje': contagem_tarefas['vencendo_hoje'],
        'atrasadas': contagem_tarefas['atrasadas'],
        'por_status': calcular_distribuicao_status(usuario),
        'total_contatos': contagem_contatos['total'],
        'contatos_novos_mes': contagem_contatos['novos_mes'],
        'sync_sucesso': contagem_sync['sucesso'],
        'sync_erros': contagem_sync['erros'],
        'proximas_tarefas': [
            {
                'id': t.id,
                'titulo': t.titulo,
                'prazo': t.prazo.isoformat(),
                'prioridade': t.prioridade,
                'board_id': t.board_id,
            }
            for t in proximas
        ],
    }
