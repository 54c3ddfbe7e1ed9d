# apps/core/tests/test_views.py

import json

from django.test import TestCase
from django.urls import reverse

from apps.core.models import Board, Contato, Tarefa, Usuario


class ApiTestCase(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')
        self.board = Board.objects.create(nome='Principal', usuario=self.usuario)
        self.client.force_login(self.usuario)

    def post_json(self, url, dados):
        return self.client.post(url, data=json.dumps(dados), content_type='application/json')

    def patch_json(self, url, dados):
        return self.client.patch(url, data=json.dumps(dados), content_type='application/json')


class ApiBoardsTest(ApiTestCase):

    def test_exige_autenticacao(self):
        self.client.logout()

        response = self.client.get(reverse('core:api_boards'))

        self.assertEqual(response.status_code, 401)

    def test_lista_boards_do_usuario(self):
        outro = Usuario.objects.create_user(username='bruno', password='senha123')
        Board.objects.create(nome='Alheio', usuario=outro)

        response = self.client.get(reverse('core:api_boards'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([b['nome'] for b in response.json()['boards']], ['Principal'])

    def test_cria_board(self):
        response = self.post_json(reverse('core:api_boards'), {'nome': 'Vendas', 'cor': 'green'})

        self.assertEqual(response.status_code, 201)
        dados = response.json()
        self.assertEqual(dados['board']['nome'], 'Vendas')
        self.assertEqual(dados['notificacoes'][0]['descricao'], 'Board criado com sucesso')
        self.assertTrue(Board.objects.filter(nome='Vendas', usuario=self.usuario).exists())

    def test_json_invalido(self):
        response = self.client.post(
            reverse('core:api_boards'), data='{quebrado', content_type='application/json'
        )

        self.assertEqual(response.status_code, 400)

    def test_excluir_unico_board_e_recusado(self):
        response = self.client.delete(reverse('core:api_board_detalhe', args=[self.board.pk]))

        self.assertEqual(response.status_code, 400)
        self.assertIn('único board', response.json()['notificacoes'][0]['descricao'])
        self.assertTrue(Board.objects.filter(pk=self.board.pk).exists())

    def test_board_de_outro_usuario_responde_404(self):
        outro = Usuario.objects.create_user(username='bruno', password='senha123')
        alheio = Board.objects.create(nome='Alheio', usuario=outro)

        response = self.patch_json(reverse('core:api_board_detalhe', args=[alheio.pk]), {'nome': 'Meu'})

        self.assertEqual(response.status_code, 404)
        alheio.refresh_from_db()
        self.assertEqual(alheio.nome, 'Alheio')


class ApiTarefasTest(ApiTestCase):

    def test_cria_e_lista_tarefas_do_board(self):
        url = reverse('core:api_tarefas', args=[self.board.pk])

        response = self.post_json(url, {'titulo': 'Revisar contrato', 'prioridade': 'high'})
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()['sincronizada_crm'])

        response = self.client.get(url)
        tarefas = response.json()['tarefas']
        self.assertEqual(len(tarefas), 1)
        self.assertEqual(tarefas[0]['status'], 'todo')
        self.assertEqual(tarefas[0]['board_id'], self.board.pk)

    def test_status_invalido(self):
        tarefa = Tarefa.objects.create(titulo='Tarefa', board=self.board, usuario=self.usuario)

        response = self.patch_json(
            reverse('core:api_tarefa_detalhe', args=[tarefa.pk]), {'status': 'archived'}
        )

        self.assertEqual(response.status_code, 400)
        tarefa.refresh_from_db()
        self.assertEqual(tarefa.status, 'todo')

    def test_move_tarefa_por_patch(self):
        tarefa = Tarefa.objects.create(titulo='Tarefa', board=self.board, usuario=self.usuario)

        response = self.patch_json(
            reverse('core:api_tarefa_detalhe', args=[tarefa.pk]), {'status': 'progress'}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['tarefa']['status'], 'progress')

    def test_tarefas_de_board_alheio(self):
        outro = Usuario.objects.create_user(username='bruno', password='senha123')
        alheio = Board.objects.create(nome='Alheio', usuario=outro)

        response = self.post_json(reverse('core:api_tarefas', args=[alheio.pk]), {'titulo': 'X'})

        self.assertEqual(response.status_code, 404)
        self.assertFalse(Tarefa.objects.filter(board=alheio).exists())


class ApiContatosTest(ApiTestCase):

    def test_cria_contato_manual(self):
        response = self.post_json(reverse('core:api_contatos'), {
            'nome': 'Carla', 'email': 'carla@example.com', 'telefone': ''
        })

        self.assertEqual(response.status_code, 201)
        contato = Contato.objects.get(usuario=self.usuario)
        self.assertIsNone(contato.telefone)
        self.assertIsNone(contato.method_crm_id)

    def test_excluir_contato_inexistente(self):
        response = self.client.delete(reverse('core:api_contato_detalhe', args=[999999]))

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])
        self.assertEqual(response.json()['notificacoes'][0]['nivel'], 'error')

    def test_exclui_contato(self):
        contato = Contato.objects.create(nome='Carla', usuario=self.usuario)

        response = self.client.delete(reverse('core:api_contato_detalhe', args=[contato.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Contato.objects.filter(pk=contato.pk).exists())


class MonitoramentoTest(ApiTestCase):

    def test_health_check(self):
        self.client.logout()

        response = self.client.get(reverse('core:health'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'healthy')

    def test_cabecalho_do_usuario(self):
        response = self.client.get(reverse('core:api_boards'))

        self.assertEqual(response['X-Fluxo-User'], str(self.usuario.pk))
