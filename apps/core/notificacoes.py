# apps/core/notificacoes.py

"""
Notificações transitórias (toasts) exibidas ao usuário

Os stores e a integração com o CRM nunca propagam exceções para a camada
de apresentação: toda falha vira uma notificação aqui.
"""

import logging
from typing import List

from django.utils import timezone

logger = logging.getLogger(__name__)


class Notificacao:
    """Toast exibido ao usuário"""

    NIVEIS = ('success', 'error', 'warning', 'info')

    def __init__(self, nivel: str, titulo: str, descricao: str):
        self.nivel = nivel
        self.titulo = titulo
        self.descricao = descricao
        self.criada_em = timezone.now().isoformat()

    def como_dict(self):
        return {
            'nivel': self.nivel,
            'titulo': self.titulo,
            'descricao': self.descricao,
            'criada_em': self.criada_em,
        }


class Notificador:
    """
    Acumula notificações de uma sessão

    O consumer WebSocket esvazia a fila com `consumir()` depois de cada
    mensagem processada e envia os toasts ao navegador.
    """

    def __init__(self):
        self._pendentes: List[Notificacao] = []

    def _emitir(self, nivel: str, titulo: str, descricao: str) -> Notificacao:
        notificacao = Notificacao(nivel=nivel, titulo=titulo, descricao=descricao)
        self._pendentes.append(notificacao)
        logger.debug(f"🔔 Notificação [{nivel}] {titulo}: {descricao}")
        return notificacao

    def sucesso(self, descricao: str, titulo: str = 'Sucesso') -> Notificacao:
        return self._emitir('success', titulo, descricao)

    def erro(self, descricao: str, titulo: str = 'Erro') -> Notificacao:
        return self._emitir('error', titulo, descricao)

    def aviso(self, descricao: str, titulo: str = 'Aviso') -> Notificacao:
        return self._emitir('warning', titulo, descricao)

    def info(self, descricao: str, titulo: str = 'Info') -> Notificacao:
        return self._emitir('info', titulo, descricao)

    @property
    def pendentes(self) -> List[Notificacao]:
        return list(self._pendentes)

    def tem_erros(self) -> bool:
        return any(n.nivel == 'error' for n in self._pendentes)

    def consumir(self) -> List[Notificacao]:
        """Retorna e limpa as notificações acumuladas"""
        pendentes, self._pendentes = self._pendentes, []
        return pendentes
