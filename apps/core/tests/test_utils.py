# apps/core/tests/test_utils.py

from datetime import timedelta

from django.core.exceptions import ValidationError
from django.test import TestCase, override_settings
from django.utils import timezone

from apps.core.models import Board, RegistroSync, Tarefa, Usuario
from apps.core.utils import agrupar_em_colunas, converter_data, serializar_colunas


class AgruparEmColunasTest(TestCase):

    def test_cada_tarefa_aparece_em_uma_unica_coluna(self):
        tarefas = [
            Tarefa(id=1, titulo='A', status='todo', board_id=1),
            Tarefa(id=2, titulo='B', status='done', board_id=1),
            Tarefa(id=3, titulo='C', status='todo', board_id=1),
            Tarefa(id=4, titulo='D', status='progress', board_id=1),
        ]

        colunas = agrupar_em_colunas(tarefas)

        self.assertEqual([c['id'] for c in colunas], ['todo', 'progress', 'done'])
        self.assertEqual([t.id for t in colunas[0]['tarefas']], [1, 3])
        self.assertEqual([t.id for t in colunas[1]['tarefas']], [4])
        self.assertEqual([t.id for t in colunas[2]['tarefas']], [2])

    def test_filtra_pelo_board(self):
        tarefas = [
            Tarefa(id=1, titulo='A', status='todo', board_id=1),
            Tarefa(id=2, titulo='B', status='todo', board_id=2),
        ]

        colunas = agrupar_em_colunas(tarefas, board_id=2)

        self.assertEqual([t.id for t in colunas[0]['tarefas']], [2])

    def test_sem_tarefas_mantem_as_tres_colunas(self):
        colunas = serializar_colunas(agrupar_em_colunas([]))

        self.assertEqual(len(colunas), 3)
        self.assertTrue(all(c['total'] == 0 for c in colunas))


class ConverterDataTest(TestCase):

    def test_data_simples_vira_datetime_com_timezone(self):
        data = converter_data('2024-12-28')

        self.assertTrue(timezone.is_aware(data))
        self.assertEqual((data.year, data.month, data.day), (2024, 12, 28))

    def test_datetime_iso(self):
        data = converter_data('2024-12-28T15:30:00Z')

        self.assertEqual(data.hour, 15)

    def test_vazio(self):
        self.assertIsNone(converter_data(None))
        self.assertIsNone(converter_data(''))

    def test_data_invalida(self):
        with self.assertRaises(ValueError):
            converter_data('amanhã')


class ModelosTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')

    def test_registro_sync_nao_pode_ser_alterado(self):
        registro = RegistroSync.objects.create(
            tipo_entidade='task', entidade_id='1', status_sync='error', usuario=self.usuario
        )
        registro.status_sync = 'synced'

        with self.assertRaises(ValidationError):
            registro.save()

    @override_settings(FLUXO_BOARD_CORES=['blue'])
    def test_cores_do_board_vem_das_settings(self):
        board = Board(nome='Verde', cor='green', usuario=self.usuario)

        with self.assertRaises(ValidationError):
            board.full_clean()

    def test_tarefa_atrasada(self):
        board = Board.objects.create(nome='Principal', usuario=self.usuario)
        ontem = timezone.now() - timedelta(days=1)
        tarefa = Tarefa(titulo='Atrasada', prazo=ontem, board=board, usuario=self.usuario)

        self.assertTrue(tarefa.esta_atrasada())
        tarefa.status = 'done'
        self.assertFalse(tarefa.esta_atrasada())
