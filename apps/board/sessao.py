# apps/board/sessao.py

import logging
from typing import Dict, Optional

from apps.core.notificacoes import Notificador
from apps.core.stores import BoardStore, ContatoStore, TarefaStore
from apps.core.utils import (
    agrupar_em_colunas,
    serializar_board,
    serializar_colunas,
    serializar_contato,
)
from apps.crm.integracao import IntegracaoCRM

from .reconciliador import ReconciliadorBoard

logger = logging.getLogger(__name__)


class SessaoDashboard:
    """
    Estado do dashboard de um usuário conectado

    Criada quando o WebSocket conecta e encerrada quando desconecta.
    Agrupa os stores, o reconciliador de arraste e a integração com o CRM,
    todos compartilhando o mesmo notificador.
    """

    def __init__(self, usuario, notificador: Optional[Notificador] = None, fabrica_cliente_crm=None):
        self.usuario = usuario
        self.notificador = notificador or Notificador()

        self.boards = BoardStore(usuario, self.notificador)
        self.tarefas = TarefaStore(usuario, self.notificador)
        self.contatos = ContatoStore(usuario, self.notificador)

        self.reconciliador = ReconciliadorBoard(self.tarefas)
        self.crm = IntegracaoCRM(usuario, self.notificador, self.contatos, fabrica_cliente_crm)

    @property
    def board_atual_id(self):
        return self.tarefas.board_id

    async def iniciar(self):
        """Carrega boards e contatos e seleciona o primeiro board"""
        await self.boards.buscar()
        await self.contatos.buscar()

        if self.boards.itens:
            await self.selecionar_board(self.boards.itens[0].pk)
        else:
            await self.tarefas.buscar()

        logger.info(f"📋 Sessão iniciada para {self.usuario.username} ({len(self.boards.itens)} boards)")

    async def recarregar(self):
        """Busca tudo de novo (mudanças feitas em outra aba)"""
        await self.boards.buscar()
        await self.contatos.buscar()

        atual = self.board_atual_id
        if atual is None or self.boards.obter(atual) is None:
            proximo = self.boards.itens[0].pk if self.boards.itens else None
            if proximo != atual:
                await self.selecionar_board(proximo)
                return

        await self.tarefas.buscar()

    async def selecionar_board(self, board_id) -> bool:
        if board_id is not None and self.boards.obter(board_id) is None:
            self.notificador.erro("Board não encontrado")
            return False

        self.reconciliador.cancelar_arraste()
        await self.tarefas.definir_board(board_id)
        return True

    async def criar_board(self, dados: Dict):
        """Cria o board e já passa a exibi-lo"""
        board = await self.boards.criar(dados)
        if board is not None:
            await self.selecionar_board(board.pk)
        return board

    async def deletar_board(self, board_id) -> bool:
        """
        Exclui o board; se era o board atual, passa para o primeiro restante
        """
        excluido = await self.boards.deletar(board_id)
        if excluido and board_id == self.board_atual_id:
            proximo = self.boards.itens[0].pk if self.boards.itens else None
            await self.selecionar_board(proximo)
        return excluido

    async def criar_tarefa(self, dados: Dict, sincronizar_crm: bool = False):
        """Cria a tarefa no board atual e, se pedido, replica no Method CRM"""
        tarefa = await self.tarefas.criar(dados)
        if tarefa is not None and sincronizar_crm:
            await self.crm.criar_tarefa_no_crm(tarefa)
        return tarefa

    def colunas(self):
        return agrupar_em_colunas(self.tarefas.itens, self.board_atual_id)

    def estado(self) -> Dict:
        """Snapshot serializável enviado ao navegador"""
        return {
            'board_atual_id': self.board_atual_id,
            'boards': [serializar_board(b) for b in self.boards.itens],
            'colunas': serializar_colunas(self.colunas()),
            'contatos': [serializar_contato(c) for c in self.contatos.itens],
            'carregando': {
                'boards': self.boards.carregando,
                'tarefas': self.tarefas.carregando,
                'contatos': self.contatos.carregando,
            },
            'arraste': {
                'estado': self.reconciliador.estado,
                'tarefa_ativa_id': self.reconciliador.tarefa_ativa_id,
            },
            'pendentes': sorted(self.tarefas.pendentes),
            'sincronizando_crm': self.crm.sincronizando,
        }

    async def encerrar(self):
        """Espera gravações pendentes e descarta os espelhos"""
        self.reconciliador.cancelar_arraste()
        await self.reconciliador.aguardar_persistencias()

        for store in (self.boards, self.tarefas, self.contatos):
            store.itens = []

        logger.info(f"👋 Sessão encerrada para {self.usuario.username}")
