# apps/relatorios/tests/test_resumo.py

from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.core.models import Board, Contato, RegistroSync, Tarefa, Usuario
from apps.relatorios.utils import calcular_resumo_usuario


class ResumoUsuarioTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')
        self.board = Board.objects.create(nome='Principal', usuario=self.usuario)
        agora = timezone.now()

        self.criar_tarefa('Atrasada', prazo=agora - timedelta(days=3))
        self.criar_tarefa('Semana que vem', prazo=agora + timedelta(days=7), prioridade='high')
        self.criar_tarefa('Amanhã', prazo=agora + timedelta(days=1))
        self.criar_tarefa('Sem prazo', status='progress')
        self.criar_tarefa('Concluída', status='done', prazo=agora - timedelta(days=1))

        Contato.objects.create(nome='Carla', usuario=self.usuario)
        RegistroSync.objects.create(tipo_entidade='task', entidade_id='1', status_sync='synced', usuario=self.usuario)
        RegistroSync.objects.create(tipo_entidade='task', entidade_id='2', status_sync='error', usuario=self.usuario)

        outro = Usuario.objects.create_user(username='bruno', password='senha123')
        board_alheio = Board.objects.create(nome='Alheio', usuario=outro)
        Tarefa.objects.create(titulo='Alheia', board=board_alheio, usuario=outro)

    def criar_tarefa(self, titulo, **campos):
        return Tarefa.objects.create(titulo=titulo, board=self.board, usuario=self.usuario, **campos)

    def test_contagens(self):
        resumo = calcular_resumo_usuario(self.usuario)

        self.assertEqual(resumo['tarefas_ativas'], 4)
        self.assertEqual(resumo['atrasadas'], 1)
        self.assertEqual(resumo['por_status'], {'todo': 3, 'progress': 1, 'done': 1})
        self.assertEqual(resumo['total_contatos'], 1)
        self.assertEqual(resumo['contatos_novos_mes'], 1)
        self.assertEqual(resumo['sync_sucesso'], 1)
        self.assertEqual(resumo['sync_erros'], 1)

    def test_proximas_tarefas_por_prazo(self):
        resumo = calcular_resumo_usuario(self.usuario)

        self.assertEqual(
            [t['titulo'] for t in resumo['proximas_tarefas']],
            ['Amanhã', 'Semana que vem']
        )
        self.assertEqual(resumo['proximas_tarefas'][1]['prioridade'], 'high')

    def test_api_resumo(self):
        self.client.force_login(self.usuario)

        response = self.client.get(reverse('relatorios:api_resumo'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['tarefas_ativas'], 4)
        self.assertIn('gerado_em', response.json())

    def test_api_resumo_exige_login(self):
        response = self.client.get(reverse('relatorios:api_resumo'))

        self.assertEqual(response.status_code, 401)
