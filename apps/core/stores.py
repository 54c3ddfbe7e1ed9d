# apps/core/stores.py

"""
Stores de acesso a dados (boards, tarefas, contatos)

Cada store busca, cria, atualiza e remove registros do usuário logado e
mantém um espelho em memória (`itens`) usado para renderização.

Regras comuns:
- Sem usuário autenticado, toda operação é ignorada silenciosamente
- Qualquer falha é registrada no log, vira notificação para o usuário
  e deixa o espelho intacto
- Cada busca recebe um número de geração; respostas de gerações antigas
  são descartadas (troca rápida de board não sobrescreve dados novos)
"""

import logging
from typing import Dict, List, Optional

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Board, Contato, Tarefa
from .notificacoes import Notificador
from .utils import converter_data

logger = logging.getLogger(__name__)


class OperacaoRecusada(Exception):
    """Operação bloqueada por regra de negócio"""


def mover_item(lista: List, de: int, para: int) -> List:
    """
    Move um elemento de posição numa lista (semântica de array-move)

    Os elementos entre as duas posições deslocam uma casa.
    Retorna uma nova lista.
    """
    nova = list(lista)
    if de == para:
        return nova
    item = nova.pop(de)
    nova.insert(para, item)
    return nova


class StoreBase:
    """Comportamento comum dos stores"""

    modelo = None
    rotulo = 'Registro'
    nome_plural = 'registros'
    genero = 'o'
    campos_editaveis = ()

    def __init__(self, usuario, notificador: Optional[Notificador] = None):
        self.usuario = usuario
        self.notificador = notificador or Notificador()
        self.itens = []
        self.carregando = True
        self._geracao = 0

    @property
    def autenticado(self) -> bool:
        return self.usuario is not None and getattr(self.usuario, 'is_authenticated', False)

    def escopo(self) -> Dict:
        """Filtro aplicado às buscas e inserções"""
        return {'usuario': self.usuario}

    def obter(self, registro_id):
        for item in self.itens:
            if item.pk == registro_id:
                return item
        return None

    def preparar_campos(self, campos: Dict, criacao: bool = False) -> Dict:
        """Mantém apenas campos editáveis"""
        ignorados = set(campos) - set(self.campos_editaveis)
        if ignorados:
            logger.debug(f"Campos ignorados em {self.rotulo}: {sorted(ignorados)}")
        return {nome: valor for nome, valor in campos.items() if nome in self.campos_editaveis}

    def descrever_erro(self, acao: str, erro: Exception) -> str:
        if isinstance(erro, OperacaoRecusada):
            return str(erro)
        if isinstance(erro, ValidationError):
            return f"Falha ao {acao} {self.rotulo.lower()}: {'; '.join(erro.messages)}"
        return f"Falha ao {acao} {self.rotulo.lower()}"

    def _substituir(self, registro):
        self.itens = [registro if item.pk == registro.pk else item for item in self.itens]

    # === Acesso ao banco (roda fora do event loop) ===

    def _consultar(self, escopo: Dict) -> List:
        return list(self.modelo.objects.filter(**escopo).order_by('-criado_em', '-id'))

    def _inserir(self, escopo: Dict, campos: Dict):
        registro = self.modelo(**escopo, **campos)
        registro.full_clean()
        registro.save()
        return registro

    def _atualizar(self, registro_id, campos: Dict):
        registro = self.modelo.objects.get(pk=registro_id, usuario=self.usuario)
        for nome, valor in campos.items():
            setattr(registro, nome, valor)
        registro.full_clean()
        registro.save(update_fields=[*campos.keys(), 'atualizado_em'])
        return registro

    def _remover(self, registro_id):
        removidos, _ = self.modelo.objects.filter(pk=registro_id, usuario=self.usuario).delete()
        if not removidos:
            raise self.modelo.DoesNotExist(f"{self.rotulo} {registro_id} não encontrad{self.genero}")

    # === Operações públicas ===

    async def buscar(self) -> Optional[List]:
        """Carrega os registros do usuário, mais recentes primeiro"""
        if not self.autenticado:
            return None

        self._geracao += 1
        geracao = self._geracao

        try:
            registros = await sync_to_async(self._consultar)(self.escopo())
        except Exception as e:
            logger.error(f"❌ Erro ao buscar {self.nome_plural}: {e}")
            if geracao == self._geracao:
                self.carregando = False
                self.notificador.erro(f"Falha ao carregar {self.nome_plural}")
            return None

        if geracao != self._geracao:
            logger.debug(f"Resposta obsoleta de {self.nome_plural} descartada (geração {geracao})")
            return None

        self.itens = registros
        self.carregando = False
        return registros

    async def criar(self, campos: Dict):
        if not self.autenticado:
            return None

        try:
            campos = self.preparar_campos(campos, criacao=True)
            registro = await sync_to_async(self._inserir)(self.escopo(), campos)
        except Exception as e:
            logger.error(f"❌ Erro ao criar {self.rotulo.lower()}: {e}")
            self.notificador.erro(self.descrever_erro('criar', e))
            return None

        self.itens = [registro] + self.itens
        self.notificador.sucesso(f"{self.rotulo} criad{self.genero} com sucesso")
        return registro

    async def atualizar(self, registro_id, campos: Dict):
        """Altera apenas os campos informados"""
        if not self.autenticado:
            return None

        try:
            campos = self.preparar_campos(campos)
            registro = await sync_to_async(self._atualizar)(registro_id, campos)
        except Exception as e:
            logger.error(f"❌ Erro ao atualizar {self.rotulo.lower()} {registro_id}: {e}")
            self.notificador.erro(self.descrever_erro('atualizar', e))
            return None

        self._substituir(registro)
        return registro

    async def deletar(self, registro_id) -> bool:
        if not self.autenticado:
            return False

        try:
            await sync_to_async(self._remover)(registro_id)
        except Exception as e:
            logger.error(f"❌ Erro ao excluir {self.rotulo.lower()} {registro_id}: {e}")
            self.notificador.erro(self.descrever_erro('excluir', e))
            return False

        self.itens = [item for item in self.itens if item.pk != registro_id]
        self.notificador.sucesso(f"{self.rotulo} excluíd{self.genero} com sucesso")
        return True


class BoardStore(StoreBase):
    modelo = Board
    rotulo = 'Board'
    nome_plural = 'boards'
    campos_editaveis = ('nome', 'descricao', 'cor')

    def _remover(self, registro_id):
        """
        Remove o board e suas tarefas numa única transação

        Enquanto FLUXO_MANTER_UM_BOARD estiver ativo, o último board do
        usuário não pode ser excluído.
        """
        with transaction.atomic():
            board = Board.objects.get(pk=registro_id, usuario=self.usuario)

            if getattr(settings, 'FLUXO_MANTER_UM_BOARD', True):
                if Board.objects.filter(usuario=self.usuario).count() <= 1:
                    raise OperacaoRecusada(
                        "Não é possível excluir o único board. Crie outro board antes."
                    )

            Tarefa.objects.filter(board=board, usuario=self.usuario).delete()
            board.delete()


class TarefaStore(StoreBase):
    """
    Tarefas do board selecionado

    Também guarda o estado das mudanças otimistas de status: enquanto a
    persistência não confirma, a tarefa fica pendente e o último status
    confirmado é lembrado para restauração em caso de falha.
    """

    modelo = Tarefa
    rotulo = 'Tarefa'
    nome_plural = 'tarefas'
    genero = 'a'
    campos_editaveis = ('titulo', 'descricao', 'status', 'prioridade', 'prazo', 'lembrete')

    def __init__(self, usuario, notificador: Optional[Notificador] = None, board_id=None):
        super().__init__(usuario, notificador)
        self.board_id = board_id
        self._confirmados = {}
        self._versoes = {}

    def escopo(self) -> Dict:
        return {'usuario': self.usuario, 'board_id': self.board_id}

    @property
    def pendentes(self):
        """Ids das tarefas com mudança de status aguardando confirmação"""
        return set(self._versoes)

    def preparar_campos(self, campos: Dict, criacao: bool = False) -> Dict:
        campos = super().preparar_campos(campos, criacao)

        if 'status' in campos and campos['status'] not in Tarefa.status_validos():
            raise ValidationError(f"Status inválido: {campos['status']}")
        if 'prioridade' in campos and campos['prioridade'] not in Tarefa.prioridades_validas():
            raise ValidationError(f"Prioridade inválida: {campos['prioridade']}")
        if 'prazo' in campos:
            try:
                campos['prazo'] = converter_data(campos['prazo'])
            except ValueError as e:
                raise ValidationError(str(e))
        if 'lembrete' in campos:
            campos['lembrete'] = bool(campos['lembrete'])
        if 'descricao' in campos and campos['descricao'] is None:
            campos['descricao'] = ''
        return campos

    def _inserir(self, escopo: Dict, campos: Dict):
        if not Board.objects.filter(pk=escopo['board_id'], usuario=self.usuario).exists():
            raise OperacaoRecusada("Board não encontrado")
        return super()._inserir(escopo, campos)

    async def definir_board(self, board_id):
        """Troca o board em foco e recarrega as tarefas"""
        if board_id == self.board_id:
            return
        self.board_id = board_id
        self._confirmados.clear()
        self._versoes.clear()
        await self.buscar()

    async def buscar(self) -> Optional[List]:
        if not self.autenticado or self.board_id is None:
            # Invalida buscas em andamento do board anterior
            self._geracao += 1
            self.itens = []
            self.carregando = False
            return None
        return await super().buscar()

    async def criar(self, campos: Dict):
        if self.board_id is None:
            return None
        return await super().criar(campos)

    # === Mudanças otimistas ===

    def aplicar_status_local(self, tarefa_id, status: str) -> Optional[int]:
        """
        Muda o status no espelho antes da confirmação do banco

        Retorna a versão da mudança, usada por `persistir_status`.
        """
        if status not in Tarefa.status_validos():
            raise ValueError(f"Status inválido: {status}")

        tarefa = self.obter(tarefa_id)
        if tarefa is None:
            return None

        self._confirmados.setdefault(tarefa_id, tarefa.status)
        versao = self._versoes.get(tarefa_id, 0) + 1
        self._versoes[tarefa_id] = versao
        tarefa.status = status
        return versao

    async def persistir_status(self, tarefa_id, status: str, versao: int):
        """
        Grava o status otimista

        Só a mudança mais recente de cada tarefa pode restaurar ou substituir
        a entrada do espelho.
        """
        try:
            registro = await sync_to_async(self._atualizar)(tarefa_id, {'status': status})
        except Exception as e:
            logger.error(f"❌ Erro ao persistir status da tarefa {tarefa_id}: {e}")
            if self._versoes.get(tarefa_id) == versao:
                self._reverter(tarefa_id)
                self.notificador.erro("Falha ao mover tarefa. O status anterior foi restaurado.")
            return None

        if self._versoes.get(tarefa_id) == versao:
            self._versoes.pop(tarefa_id, None)
            self._confirmados.pop(tarefa_id, None)
            self._substituir(registro)
        elif tarefa_id in self._versoes:
            self._confirmados[tarefa_id] = registro.status
        return registro

    def _reverter(self, tarefa_id):
        status_confirmado = self._confirmados.pop(tarefa_id, None)
        self._versoes.pop(tarefa_id, None)
        tarefa = self.obter(tarefa_id)
        if tarefa is not None and status_confirmado is not None:
            tarefa.status = status_confirmado
            logger.info(f"↩️ Tarefa {tarefa_id} restaurada para '{status_confirmado}'")

    def reordenar(self, tarefa_id, alvo_id) -> bool:
        """Move a tarefa para a posição do alvo no espelho (somente em memória)"""
        ids = [item.pk for item in self.itens]
        if tarefa_id not in ids or alvo_id not in ids:
            return False
        self.itens = mover_item(self.itens, ids.index(tarefa_id), ids.index(alvo_id))
        return True


class ContatoStore(StoreBase):
    modelo = Contato
    rotulo = 'Contato'
    nome_plural = 'contatos'
    campos_editaveis = ('nome', 'email', 'telefone', 'empresa', 'method_crm_id')

    def preparar_campos(self, campos: Dict, criacao: bool = False) -> Dict:
        campos = super().preparar_campos(campos, criacao)
        for nome in ('email', 'telefone', 'empresa', 'method_crm_id'):
            if nome in campos and campos[nome] == '':
                campos[nome] = None
        return campos
