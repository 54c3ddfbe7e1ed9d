# apps/board/reconciliador.py

"""
Reconciliação do estado do board durante o drag-and-drop

Estados:
    idle      -> nenhuma tarefa sendo arrastada
    dragging  -> tarefa_ativa_id aponta a tarefa em movimento

Durante o arraste a mudança de status é aplicada antes do drop
(atualização otimista) e a gravação roda em segundo plano. No drop,
soltar sobre outra tarefa da mesma coluna apenas reordena o espelho
em memória; a ordem não é persistida.
"""

import asyncio
import logging

from apps.core.models import Tarefa

logger = logging.getLogger(__name__)

STATUS_COLUNAS = tuple(Tarefa.status_validos())

ESTADO_OCIOSO = 'idle'
ESTADO_ARRASTANDO = 'dragging'


def normalizar_alvo(alvo):
    """
    Identifica o alvo de um arraste

    Retorna ('coluna', status), ('tarefa', id) ou (None, None).
    """
    if alvo is None:
        return None, None
    if str(alvo) in STATUS_COLUNAS:
        return 'coluna', str(alvo)
    try:
        return 'tarefa', int(alvo)
    except (TypeError, ValueError):
        return None, None


class ReconciliadorBoard:
    """Traduz gestos de arraste em mudanças no store de tarefas"""

    def __init__(self, tarefas):
        self.tarefas = tarefas
        self.tarefa_ativa_id = None
        self._persistencias = set()

    @property
    def estado(self):
        return ESTADO_ARRASTANDO if self.tarefa_ativa_id is not None else ESTADO_OCIOSO

    def iniciar_arraste(self, tarefa_id):
        self.tarefa_ativa_id = int(tarefa_id)
        logger.debug(f"🖐️ Arraste iniciado - tarefa {self.tarefa_ativa_id}")

    def arrastar_sobre(self, tarefa_id, alvo_id) -> bool:
        """
        Tarefa passando sobre uma coluna ou outra tarefa

        Se o alvo implica outro status, muda o status localmente e
        dispara a gravação sem esperar o resultado.
        """
        tarefa = self.tarefas.obter(int(tarefa_id))
        if tarefa is None:
            return False

        tipo, valor = normalizar_alvo(alvo_id)
        if tipo == 'coluna':
            novo_status = valor
        elif tipo == 'tarefa':
            if valor == tarefa.pk:
                return False
            alvo = self.tarefas.obter(valor)
            if alvo is None:
                return False
            novo_status = alvo.status
        else:
            return False

        if novo_status == tarefa.status:
            return False

        versao = self.tarefas.aplicar_status_local(tarefa.pk, novo_status)
        logger.info(f"🔄 Tarefa {tarefa.pk} movida para '{novo_status}' (otimista)")
        self._despachar(self.tarefas.persistir_status(tarefa.pk, novo_status, versao))
        return True

    def finalizar_arraste(self, tarefa_id, alvo_id) -> bool:
        """
        Drop da tarefa

        Retorna True quando o espelho foi reordenado.
        """
        self.tarefa_ativa_id = None

        tipo, valor = normalizar_alvo(alvo_id)
        if tipo != 'tarefa':
            return False

        tarefa_id = int(tarefa_id)
        if valor == tarefa_id:
            return False

        tarefa = self.tarefas.obter(tarefa_id)
        alvo = self.tarefas.obter(valor)
        if tarefa is None or alvo is None or tarefa.status != alvo.status:
            return False

        return self.tarefas.reordenar(tarefa_id, valor)

    def cancelar_arraste(self):
        """Cancela o gesto; mudanças otimistas já aplicadas permanecem"""
        self.tarefa_ativa_id = None

    def _despachar(self, corrotina):
        tarefa = asyncio.ensure_future(corrotina)
        self._persistencias.add(tarefa)
        tarefa.add_done_callback(self._persistencias.discard)

    async def aguardar_persistencias(self):
        """Espera as gravações em andamento terminarem"""
        if self._persistencias:
            await asyncio.wait(list(self._persistencias))
