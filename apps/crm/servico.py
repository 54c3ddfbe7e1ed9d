# apps/crm/servico.py

"""
Sincronização entre o Fluxo Board e o Method CRM

- Contatos: Customer (Method) -> contacts (upsert por method_crm_id + usuário)
- Tarefas: tasks -> Activity (Method), com registro em method_sync
"""

import logging
from typing import Dict, List

import httpx
from asgiref.sync import sync_to_async
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.core.models import Contato, RegistroSync
from apps.core.utils import serializar_registro_sync

from .cliente import ClienteMethodCRM
from .esquemas import DadosTarefaAtividade, ler_clientes, ler_resposta_criacao
from .exceptions import ErroCRM

logger = logging.getLogger(__name__)

ACOES = ('sync_contacts', 'sync_tasks', 'create_activity', 'create_contact')


class ServicoSyncCRM:
    """Operações de sincronização de um usuário"""

    def __init__(self, cliente: ClienteMethodCRM):
        self.cliente = cliente

    # === Banco ===

    def _obter_usuario(self, usuario_id):
        Usuario = get_user_model()
        try:
            return Usuario.objects.get(pk=usuario_id)
        except (Usuario.DoesNotExist, ValueError, TypeError):
            raise ValueError(f"Usuário não encontrado: {usuario_id}")

    def _gravar_contatos(self, usuario, registros: List[Dict]):
        with transaction.atomic():
            Contato.objects.bulk_create(
                [Contato(usuario=usuario, **campos) for campos in registros],
                update_conflicts=True,
                unique_fields=['method_crm_id', 'usuario'],
                update_fields=['nome', 'email', 'telefone', 'empresa', 'atualizado_em'],
            )

    def _registrar(self, usuario, entidade_id, **campos):
        return RegistroSync.objects.create(
            tipo_entidade='task',
            entidade_id='' if entidade_id is None else str(entidade_id),
            usuario=usuario,
            **campos
        )

    def _listar_registros(self, usuario_id):
        registros = RegistroSync.objects.filter(usuario_id=usuario_id).order_by('-criado_em', '-id')
        return [serializar_registro_sync(r) for r in registros]

    # === Operações ===

    async def sincronizar_contatos(self, usuario_id) -> Dict:
        """
        Importa os Customers do Method CRM como contatos do usuário

        Contatos já importados (mesmo method_crm_id) são atualizados.
        """
        usuario = await sync_to_async(self._obter_usuario)(usuario_id)
        logger.info(f"🔄 Sincronizando contatos do Method CRM para {usuario.username}")

        resposta = await self.cliente.chamar('tables/Customer')
        clientes = ler_clientes(resposta)
        logger.info(f"📇 {len(clientes)} contatos encontrados no Method CRM")

        if not clientes:
            return {'success': True, 'count': 0, 'message': 'No contacts to sync'}

        # Ids repetidos na resposta: prevalece o último
        por_id = {}
        for cliente in clientes:
            por_id[cliente.method_crm_id] = cliente.como_campos_contato()

        await sync_to_async(self._gravar_contatos)(usuario, list(por_id.values()))

        logger.info(f"✅ {len(por_id)} contatos sincronizados para {usuario.username}")
        return {'success': True, 'count': len(por_id)}

    async def criar_atividade(self, dados: Dict, usuario_id) -> Dict:
        """
        Cria uma Activity no Method CRM a partir de uma tarefa

        Sucesso ou falha, cada tentativa vira uma linha em method_sync.
        Falhas da API não são propagadas: retornam success=False.
        """
        usuario = await sync_to_async(self._obter_usuario)(usuario_id)
        entidade_id = dados.get('id', dados.get('task_id')) if isinstance(dados, dict) else None
        logger.info(f"📝 Criando atividade no Method CRM para tarefa {entidade_id}")

        try:
            atividade = DadosTarefaAtividade.model_validate(dados).como_atividade()
            resposta = await self.cliente.chamar('tables/Activity', 'POST', atividade)
            method_crm_id = ler_resposta_criacao(resposta)
        except (ErroCRM, httpx.HTTPError, ValueError) as e:
            mensagem = str(e) or 'Unknown error occurred'
            logger.error(f"❌ Erro ao criar atividade no Method CRM: {mensagem}")
            try:
                await sync_to_async(self._registrar)(
                    usuario, entidade_id,
                    status_sync='error',
                    mensagem_erro=mensagem,
                )
            except DatabaseError as erro_banco:
                logger.error(f"❌ Falha ao gravar registro de erro em method_sync: {erro_banco}")
            return {'success': False, 'error': mensagem}

        await sync_to_async(self._registrar)(
            usuario, entidade_id,
            method_crm_id=method_crm_id,
            status_sync='synced',
            ultima_sync=timezone.now(),
        )

        logger.info(f"✅ Atividade criada no Method CRM com ID {method_crm_id}")
        return {'success': True, 'method_id': method_crm_id}

    async def obter_status_sync(self, usuario_id) -> List[Dict]:
        """Histórico de sincronização do usuário, mais recente primeiro"""
        return await sync_to_async(self._listar_registros)(usuario_id)

    async def sincronizar_tarefas(self, usuario_id) -> Dict:
        return {'success': True, 'message': 'Task sync from Method CRM not yet implemented'}

    async def criar_contato(self, dados: Dict, usuario_id) -> Dict:
        return {'success': True, 'message': 'Contact creation not yet implemented'}

    async def processar(self, acao: str, dados, usuario_id) -> Dict:
        """
        Despacha uma ação recebida pelo endpoint de sincronização

        Raises:
            ValueError: ação desconhecida ou dados obrigatórios ausentes
        """
        logger.info(f"⚙️ Processando ação '{acao}' do Method CRM para usuário {usuario_id}")

        if acao == 'sync_contacts':
            return await self.sincronizar_contatos(usuario_id)

        if acao == 'create_activity':
            if not dados:
                raise ValueError('Task data is required for creating activity')
            return await self.criar_atividade(dados, usuario_id)

        if acao == 'sync_tasks':
            return await self.sincronizar_tarefas(usuario_id)

        if acao == 'create_contact':
            if not dados:
                raise ValueError('Contact data is required for creating contact')
            return await self.criar_contato(dados, usuario_id)

        raise ValueError(f'Unknown action: {acao}')
