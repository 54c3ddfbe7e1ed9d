# apps/board/tests/test_reconciliador.py

from django.test import TestCase

from apps.board.reconciliador import ESTADO_ARRASTANDO, ESTADO_OCIOSO, ReconciliadorBoard, normalizar_alvo
from apps.core.models import Board, Tarefa, Usuario
from apps.core.notificacoes import Notificador
from apps.core.stores import TarefaStore


class NormalizarAlvoTest(TestCase):

    def test_coluna(self):
        self.assertEqual(normalizar_alvo('progress'), ('coluna', 'progress'))

    def test_tarefa(self):
        self.assertEqual(normalizar_alvo(42), ('tarefa', 42))
        self.assertEqual(normalizar_alvo('42'), ('tarefa', 42))

    def test_desconhecido(self):
        self.assertEqual(normalizar_alvo('archived'), (None, None))
        self.assertEqual(normalizar_alvo(None), (None, None))


class ReconciliadorBoardTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')
        self.board = Board.objects.create(nome='Principal', usuario=self.usuario)
        self.tarefa = Tarefa.objects.create(titulo='Primeira', board=self.board, usuario=self.usuario)
        self.notificador = Notificador()

    async def preparar(self):
        store = TarefaStore(self.usuario, self.notificador, board_id=self.board.pk)
        await store.buscar()
        return store, ReconciliadorBoard(store)

    async def test_arrastar_para_coluna_concluida(self):
        store, reconciliador = await self.preparar()
        atualizado_antes = self.tarefa.atualizado_em

        reconciliador.iniciar_arraste(self.tarefa.pk)
        self.assertEqual(reconciliador.estado, ESTADO_ARRASTANDO)

        self.assertTrue(reconciliador.arrastar_sobre(self.tarefa.pk, 'done'))
        # Atualização otimista: o espelho muda antes da gravação
        self.assertEqual(store.obter(self.tarefa.pk).status, 'done')

        await reconciliador.aguardar_persistencias()
        self.assertFalse(reconciliador.finalizar_arraste(self.tarefa.pk, 'done'))

        salva = await Tarefa.objects.aget(pk=self.tarefa.pk)
        self.assertEqual(salva.status, 'done')
        self.assertGreater(salva.atualizado_em, atualizado_antes)
        self.assertEqual(store.pendentes, set())
        self.assertEqual(reconciliador.estado, ESTADO_OCIOSO)

    async def test_arrastar_sobre_tarefa_de_outra_coluna_assume_o_status_dela(self):
        feita = await Tarefa.objects.acreate(
            titulo='Feita', status='done', board=self.board, usuario=self.usuario
        )
        store, reconciliador = await self.preparar()

        reconciliador.iniciar_arraste(self.tarefa.pk)
        self.assertTrue(reconciliador.arrastar_sobre(self.tarefa.pk, feita.pk))
        await reconciliador.aguardar_persistencias()

        self.assertEqual((await Tarefa.objects.aget(pk=self.tarefa.pk)).status, 'done')

    async def test_soltar_sobre_si_mesma_nao_muda_nada(self):
        store, reconciliador = await self.preparar()
        ordem_antes = [t.pk for t in store.itens]

        reconciliador.iniciar_arraste(self.tarefa.pk)
        self.assertFalse(reconciliador.arrastar_sobre(self.tarefa.pk, self.tarefa.pk))
        self.assertFalse(reconciliador.finalizar_arraste(self.tarefa.pk, self.tarefa.pk))

        self.assertEqual([t.pk for t in store.itens], ordem_antes)
        self.assertEqual(store.pendentes, set())
        self.assertEqual(reconciliador.estado, ESTADO_OCIOSO)

    async def test_soltar_sobre_tarefa_da_mesma_coluna_reordena(self):
        segunda = await Tarefa.objects.acreate(titulo='Segunda', board=self.board, usuario=self.usuario)
        terceira = await Tarefa.objects.acreate(titulo='Terceira', board=self.board, usuario=self.usuario)
        store, reconciliador = await self.preparar()
        self.assertEqual([t.pk for t in store.itens], [terceira.pk, segunda.pk, self.tarefa.pk])

        reconciliador.iniciar_arraste(terceira.pk)
        self.assertFalse(reconciliador.arrastar_sobre(terceira.pk, self.tarefa.pk))
        self.assertTrue(reconciliador.finalizar_arraste(terceira.pk, self.tarefa.pk))

        self.assertEqual([t.pk for t in store.itens], [segunda.pk, self.tarefa.pk, terceira.pk])
        # A ordem não é gravada
        self.assertEqual(
            [t.pk async for t in Tarefa.objects.filter(board=self.board)],
            [terceira.pk, segunda.pk, self.tarefa.pk]
        )

    async def test_falha_na_gravacao_restaura_status(self):
        store, reconciliador = await self.preparar()
        await Tarefa.objects.filter(pk=self.tarefa.pk).adelete()

        reconciliador.iniciar_arraste(self.tarefa.pk)
        self.assertTrue(reconciliador.arrastar_sobre(self.tarefa.pk, 'progress'))
        await reconciliador.aguardar_persistencias()

        self.assertEqual(store.obter(self.tarefa.pk).status, 'todo')
        self.assertEqual(
            self.notificador.pendentes[-1].descricao,
            'Falha ao mover tarefa. O status anterior foi restaurado.'
        )

    async def test_alvo_desconhecido_e_ignorado(self):
        store, reconciliador = await self.preparar()

        reconciliador.iniciar_arraste(self.tarefa.pk)
        self.assertFalse(reconciliador.arrastar_sobre(self.tarefa.pk, 'archived'))
        reconciliador.cancelar_arraste()

        self.assertEqual(store.obter(self.tarefa.pk).status, 'todo')
        self.assertEqual(reconciliador.estado, ESTADO_OCIOSO)
