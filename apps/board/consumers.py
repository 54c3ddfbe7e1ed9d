# apps/board/consumers.py

import asyncio
import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer
from django.utils import timezone

from .sessao import SessaoDashboard

logger = logging.getLogger(__name__)

# Mensagens que alteram dados e devem atualizar as outras abas do usuário
MUTACOES = {
    'create_board', 'delete_board', 'create_task', 'update_task',
    'delete_task', 'sync_contacts',
}


class BoardConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket da sessão do dashboard

    Funcionalidades:
    - Seleção e CRUD de boards e tarefas
    - Gestos de drag-and-drop (start/over/end/cancel)
    - Sincronização com o Method CRM
    - Toasts e estado do board empurrados ao navegador
    """

    async def connect(self):
        """
        Cria a sessão do usuário e envia o estado inicial
        """
        self.user = self.scope.get('user')
        self.sessao = None

        if self.user is None or not self.user.is_authenticated:
            logger.warning("❌ Conexão WebSocket rejeitada - usuário não autenticado")
            await self.close()
            return

        self.user_group_name = f'usuario_{self.user.id}'
        self.sessao = SessaoDashboard(self.user)
        self._acompanhamentos = set()

        await self.channel_layer.group_add(self.user_group_name, self.channel_name)
        await self.accept()

        await self.sessao.iniciar()
        await self.enviar_estado()

        logger.info(f"✅ WebSocket conectado - {self.user.username}")

    async def disconnect(self, close_code):
        if self.sessao is None:
            return

        for tarefa in self._acompanhamentos:
            tarefa.cancel()

        await self.channel_layer.group_discard(self.user_group_name, self.channel_name)
        await self.sessao.encerrar()

        logger.info(f"🔌 WebSocket desconectado - {self.user.username}")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Recebe mensagens do cliente WebSocket
        Processa diferentes tipos de eventos
        """
        try:
            data = json.loads(text_data)
            message_type = data.get('type')

            # Heartbeat/Ping
            if message_type == 'ping':
                await self.send(text_data=json.dumps({
                    'type': 'pong',
                    'timestamp': self.get_timestamp()
                }))
                return

            if message_type == 'sync_status':
                registros = await self.sessao.crm.obter_status_sync()
                await self.send(text_data=json.dumps({
                    'type': 'sync_status',
                    'registros': registros,
                    'timestamp': self.get_timestamp()
                }))
                await self.enviar_toasts()
                return

            handler = getattr(self, f'handle_{message_type}', None)
            if handler is None:
                logger.warning(f"⚠️ Mensagem WebSocket desconhecida de {self.user.username}: {message_type}")
                self.sessao.notificador.erro(f"Ação desconhecida: {message_type}")
                await self.enviar_toasts()
                return

            await handler(data)

            if message_type in MUTACOES:
                await self.avisar_outras_sessoes(message_type)

        except json.JSONDecodeError:
            logger.error(f"❌ JSON inválido recebido via WebSocket de {self.user.username}")
            self.sessao.notificador.erro("Mensagem inválida")
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"❌ Parâmetros inválidos via WebSocket de {self.user.username}: {e}")
            self.sessao.notificador.erro("Parâmetros inválidos")

        await self.enviar_estado()

    # === Ações do cliente ===

    async def handle_sync_board(self, data):
        await self.sessao.recarregar()

    async def handle_select_board(self, data):
        board_id = data.get('board_id')
        await self.sessao.selecionar_board(int(board_id) if board_id is not None else None)

    async def handle_create_board(self, data):
        await self.sessao.criar_board(data.get('data') or {})

    async def handle_delete_board(self, data):
        await self.sessao.deletar_board(int(data['board_id']))

    async def handle_create_task(self, data):
        await self.sessao.criar_tarefa(data.get('data') or {}, sincronizar_crm=bool(data.get('sync_crm')))

    async def handle_update_task(self, data):
        await self.sessao.tarefas.atualizar(int(data['task_id']), data.get('data') or {})

    async def handle_delete_task(self, data):
        await self.sessao.tarefas.deletar(int(data['task_id']))

    async def handle_drag_start(self, data):
        self.sessao.reconciliador.iniciar_arraste(data['task_id'])

    async def handle_drag_over(self, data):
        if self.sessao.reconciliador.arrastar_sobre(data['task_id'], data.get('over_id')):
            self.acompanhar_persistencias()

    async def handle_drag_end(self, data):
        self.sessao.reconciliador.finalizar_arraste(data['task_id'], data.get('over_id'))

    async def handle_drag_cancel(self, data):
        self.sessao.reconciliador.cancelar_arraste()

    async def handle_sync_contacts(self, data):
        await self.sessao.crm.sincronizar_contatos()

    # === Envio ===

    async def enviar_toasts(self):
        for notificacao in self.sessao.notificador.consumir():
            await self.send(text_data=json.dumps({
                'type': 'toast',
                'toast': notificacao.como_dict()
            }))

    async def enviar_estado(self):
        await self.enviar_toasts()
        await self.send(text_data=json.dumps({
            'type': 'board_state',
            'state': self.sessao.estado(),
            'timestamp': self.get_timestamp()
        }))

    def acompanhar_persistencias(self):
        """Reenvia o estado quando as gravações otimistas terminarem"""
        tarefa = asyncio.ensure_future(self._apos_persistencias())
        self._acompanhamentos.add(tarefa)
        tarefa.add_done_callback(self._acompanhamentos.discard)

    async def _apos_persistencias(self):
        await self.sessao.reconciliador.aguardar_persistencias()
        await self.enviar_estado()
        await self.avisar_outras_sessoes('drag_over')

    async def avisar_outras_sessoes(self, motivo):
        await self.channel_layer.group_send(
            self.user_group_name,
            {
                'type': 'board_refresh',
                'message': {
                    'origem': self.channel_name,
                    'motivo': motivo,
                    'timestamp': self.get_timestamp()
                }
            }
        )

    # === Handlers de eventos do grupo ===

    async def board_refresh(self, event):
        """
        Outra aba do mesmo usuário alterou dados
        """
        message = event['message']
        # Não recarregar a própria sessão
        if message['origem'] == self.channel_name:
            return

        await self.sessao.recarregar()
        await self.enviar_estado()

    async def item_moved(self, event):
        """
        Tarefa movida pela API HTTP
        """
        await self.sessao.tarefas.buscar()
        await self.send(text_data=json.dumps({
            'type': 'item_moved',
            'message': event['message']
        }))
        await self.enviar_estado()

    # === Métodos auxiliares ===

    def get_timestamp(self):
        """
        Retorna timestamp atual em formato ISO
        """
        return timezone.now().isoformat()
