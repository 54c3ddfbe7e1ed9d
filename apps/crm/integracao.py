# apps/crm/integracao.py

import logging
from typing import Callable, Dict, List, Optional

import httpx
from django.db import DatabaseError

from apps.core.notificacoes import Notificador
from apps.core.utils import serializar_tarefa

from .cliente import ClienteMethodCRM
from .exceptions import ErroCRM
from .servico import ServicoSyncCRM

logger = logging.getLogger(__name__)

FALHAS_CRM = (ErroCRM, httpx.HTTPError, ValueError, DatabaseError)


class IntegracaoCRM:
    """
    Ações de CRM disparadas a partir do dashboard

    Falhas viram notificações; nada é propagado para a sessão.
    """

    def __init__(
        self,
        usuario,
        notificador: Notificador,
        contatos=None,
        fabrica_cliente: Optional[Callable[[], ClienteMethodCRM]] = None,
    ):
        self.usuario = usuario
        self.notificador = notificador
        self.contatos = contatos
        self.fabrica_cliente = fabrica_cliente or ClienteMethodCRM.de_settings
        self.sincronizando = False

    @property
    def autenticado(self) -> bool:
        return self.usuario is not None and getattr(self.usuario, 'is_authenticated', False)

    async def _com_servico(self, operacao):
        cliente = self.fabrica_cliente()
        try:
            return await operacao(ServicoSyncCRM(cliente))
        finally:
            await cliente.aclose()

    async def sincronizar_contatos(self) -> Optional[Dict]:
        """Importa os contatos do Method CRM e recarrega a lista local"""
        if not self.autenticado:
            return None

        self.sincronizando = True
        try:
            resultado = await self._com_servico(lambda s: s.sincronizar_contatos(self.usuario.pk))
        except FALHAS_CRM as e:
            logger.error(f"❌ Erro ao sincronizar contatos de {self.usuario.username}: {e}")
            self.notificador.erro("Falha ao sincronizar contatos do Method CRM", titulo='Erro de sincronização')
            return None
        finally:
            self.sincronizando = False

        self.notificador.sucesso(
            f"Sincronizados {resultado['count']} contatos do Method CRM",
            titulo='Sincronização concluída'
        )
        if self.contatos is not None:
            await self.contatos.buscar()
        return resultado

    async def criar_tarefa_no_crm(self, tarefa) -> bool:
        """Replica a tarefa como Activity; a tarefa local nunca é desfeita"""
        if not self.autenticado:
            return False

        try:
            resultado = await self._com_servico(
                lambda s: s.criar_atividade(serializar_tarefa(tarefa), self.usuario.pk)
            )
        except FALHAS_CRM as e:
            logger.error(f"❌ Erro ao enviar tarefa {tarefa.pk} ao Method CRM: {e}")
            resultado = {'success': False, 'error': str(e)}

        if not resultado.get('success'):
            self.notificador.aviso("Tarefa criada localmente, mas falhou ao sincronizar com o Method CRM")
            return False

        self.notificador.sucesso("Tarefa sincronizada com o Method CRM")
        return True

    async def obter_status_sync(self) -> List[Dict]:
        if not self.autenticado:
            return []

        try:
            return await self._com_servico(lambda s: s.obter_status_sync(self.usuario.pk))
        except FALHAS_CRM as e:
            logger.error(f"❌ Erro ao obter status de sincronização: {e}")
            self.notificador.erro("Falha ao carregar o histórico de sincronização")
            return []
