# apps/board/tests/test_views.py

import json

from django.test import TestCase
from django.urls import reverse

from apps.core.models import Board, Tarefa, Usuario


class KanbanViewsTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')
        self.client.force_login(self.usuario)

    def test_dashboard_sem_boards(self):
        response = self.client.get(reverse('board:dashboard'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'board/kanban.html')
        self.assertIsNone(response.context['board'])

    def test_dashboard_abre_board_mais_recente(self):
        Board.objects.create(nome='Antigo', usuario=self.usuario)
        recente = Board.objects.create(nome='Recente', usuario=self.usuario)

        response = self.client.get(reverse('board:dashboard'))

        self.assertRedirects(response, reverse('board:kanban', args=[recente.pk]))

    def test_kanban_agrupa_tarefas(self):
        board = Board.objects.create(nome='Principal', usuario=self.usuario)
        Tarefa.objects.create(titulo='Feita', status='done', board=board, usuario=self.usuario)

        response = self.client.get(reverse('board:kanban', args=[board.pk]))

        self.assertEqual(response.status_code, 200)
        colunas = response.context['colunas']
        self.assertEqual([t.titulo for t in colunas[2]['tarefas']], ['Feita'])
        self.assertContains(response, 'Feita')

    def test_requisicao_htmx_recebe_apenas_colunas(self):
        board = Board.objects.create(nome='Principal', usuario=self.usuario)

        response = self.client.get(reverse('board:kanban', args=[board.pk]), HTTP_HX_REQUEST='true')

        self.assertTemplateUsed(response, 'board/partials/colunas.html')
        self.assertTemplateNotUsed(response, 'board/kanban.html')

    def test_kanban_de_outro_usuario(self):
        outro = Usuario.objects.create_user(username='bruno', password='senha123')
        alheio = Board.objects.create(nome='Alheio', usuario=outro)

        response = self.client.get(reverse('board:kanban', args=[alheio.pk]))

        self.assertEqual(response.status_code, 404)

    def test_login_obrigatorio(self):
        self.client.logout()

        response = self.client.get(reverse('board:dashboard'))

        self.assertEqual(response.status_code, 302)
        self.assertIn('/login/', response['Location'])


class MoverTarefaAjaxTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')
        self.board = Board.objects.create(nome='Principal', usuario=self.usuario)
        self.tarefa = Tarefa.objects.create(titulo='Mover', board=self.board, usuario=self.usuario)
        self.client.force_login(self.usuario)
        self.url = reverse('board:mover_tarefa')

    def mover(self, dados):
        return self.client.post(self.url, data=json.dumps(dados), content_type='application/json')

    def test_move_tarefa(self):
        response = self.mover({'task_id': self.tarefa.pk, 'status': 'progress'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['tarefa']['status'], 'progress')
        self.tarefa.refresh_from_db()
        self.assertEqual(self.tarefa.status, 'progress')

    def test_status_invalido(self):
        response = self.mover({'task_id': self.tarefa.pk, 'status': 'blocked'})

        self.assertEqual(response.status_code, 400)

    def test_parametros_ausentes(self):
        self.assertEqual(self.mover({'status': 'done'}).status_code, 400)

    def test_task_id_que_nao_e_numero(self):
        response = self.mover({'task_id': {'id': self.tarefa.pk}, 'status': 'done'})

        self.assertEqual(response.status_code, 404)
        self.tarefa.refresh_from_db()
        self.assertEqual(self.tarefa.status, 'todo')

    def test_tarefa_de_outro_usuario(self):
        outro = Usuario.objects.create_user(username='bruno', password='senha123')
        board = Board.objects.create(nome='Alheio', usuario=outro)
        alheia = Tarefa.objects.create(titulo='Alheia', board=board, usuario=outro)

        response = self.mover({'task_id': alheia.pk, 'status': 'done'})

        self.assertEqual(response.status_code, 404)
        alheia.refresh_from_db()
        self.assertEqual(alheia.status, 'todo')

    def test_exige_autenticacao(self):
        self.client.logout()

        self.assertEqual(self.mover({'task_id': self.tarefa.pk, 'status': 'done'}).status_code, 401)
