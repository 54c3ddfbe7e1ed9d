# apps/crm/tests/test_integracao.py

from io import StringIO
from unittest import mock

from django.core.management import CommandError, call_command
from django.db import DatabaseError
from django.test import TestCase, override_settings

from apps.core.models import Board, Contato, Tarefa, Usuario
from apps.core.notificacoes import Notificador
from apps.core.stores import ContatoStore
from apps.crm.cliente import ClienteMethodCRM
from apps.crm.integracao import IntegracaoCRM
from apps.crm.servico import ServicoSyncCRM

from .utils import ApiFalsa


def falhar_no_banco(self, *args, **kwargs):
    raise DatabaseError('db down')


class IntegracaoCRMTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')
        self.notificador = Notificador()

    async def test_sincronizar_contatos_recarrega_lista(self):
        api = ApiFalsa(corpo={'value': [{'RecordID': 1, 'Name': 'Carla'}]})
        contatos = ContatoStore(self.usuario, self.notificador)
        integracao = IntegracaoCRM(self.usuario, self.notificador, contatos, api.cliente)

        resultado = await integracao.sincronizar_contatos()

        self.assertEqual(resultado['count'], 1)
        self.assertEqual([c.nome for c in contatos.itens], ['Carla'])
        self.assertFalse(integracao.sincronizando)
        notificacao = self.notificador.pendentes[-1]
        self.assertEqual(notificacao.titulo, 'Sincronização concluída')
        self.assertEqual(notificacao.descricao, 'Sincronizados 1 contatos do Method CRM')

    async def test_falha_ao_sincronizar_contatos(self):
        integracao = IntegracaoCRM(
            self.usuario, self.notificador, fabrica_cliente=ApiFalsa(status_code=503, texto='down').cliente
        )

        self.assertIsNone(await integracao.sincronizar_contatos())

        self.assertFalse(integracao.sincronizando)
        self.assertEqual(
            self.notificador.pendentes[-1].descricao, 'Falha ao sincronizar contatos do Method CRM'
        )
        self.assertEqual(await Contato.objects.acount(), 0)

    @override_settings(METHOD_CRM_API_KEY='')
    async def test_sem_chave_configurada(self):
        integracao = IntegracaoCRM(self.usuario, self.notificador)

        self.assertIsNone(await integracao.sincronizar_contatos())
        self.assertTrue(self.notificador.tem_erros())

    async def test_erro_de_banco_ao_gravar_contatos_vira_notificacao(self):
        api = ApiFalsa(corpo=[{'RecordID': 1, 'Name': 'Carla'}])
        integracao = IntegracaoCRM(self.usuario, self.notificador, fabrica_cliente=api.cliente)

        with mock.patch.object(ServicoSyncCRM, '_gravar_contatos', falhar_no_banco):
            self.assertIsNone(await integracao.sincronizar_contatos())

        self.assertFalse(integracao.sincronizando)
        self.assertEqual(
            self.notificador.pendentes[-1].descricao, 'Falha ao sincronizar contatos do Method CRM'
        )

    async def test_erro_de_banco_ao_registrar_sincronizacao_mantem_tarefa(self):
        board = await Board.objects.acreate(nome='Principal', usuario=self.usuario)
        tarefa = await Tarefa.objects.acreate(titulo='Ligar', board=board, usuario=self.usuario)
        api = ApiFalsa(status_code=201, corpo={'RecordID': 5})
        integracao = IntegracaoCRM(self.usuario, self.notificador, fabrica_cliente=api.cliente)

        with mock.patch.object(ServicoSyncCRM, '_registrar', falhar_no_banco):
            self.assertFalse(await integracao.criar_tarefa_no_crm(tarefa))

        aviso = self.notificador.pendentes[-1]
        self.assertEqual(aviso.nivel, 'warning')
        self.assertEqual(
            aviso.descricao, 'Tarefa criada localmente, mas falhou ao sincronizar com o Method CRM'
        )
        self.assertTrue(await Tarefa.objects.filter(pk=tarefa.pk).aexists())

    async def test_usuario_anonimo_nao_sincroniza(self):
        api = ApiFalsa(corpo=[])
        integracao = IntegracaoCRM(None, self.notificador, fabrica_cliente=api.cliente)

        self.assertIsNone(await integracao.sincronizar_contatos())
        self.assertEqual(api.requisicoes, [])


class ApiTarefasComCRMTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')
        self.board = Board.objects.create(nome='Principal', usuario=self.usuario)
        self.client.force_login(self.usuario)

    def test_cria_tarefa_e_replica_no_crm(self):
        api = ApiFalsa(status_code=201, corpo={'RecordID': 31})

        with mock.patch.object(ClienteMethodCRM, 'de_settings', side_effect=api.cliente):
            response = self.client.post(
                f'/api/boards/{self.board.pk}/tarefas/',
                data={'titulo': 'Visitar cliente', 'sincronizar_crm': True},
                content_type='application/json',
            )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()['sincronizada_crm'])
        self.assertEqual(api.ultimo_corpo['Subject'], 'Visitar cliente')
        self.assertTrue(Tarefa.objects.filter(titulo='Visitar cliente').exists())


class SincronizarCrmCommandTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(username='ana', password='senha123')

    def test_importa_contatos(self):
        api = ApiFalsa(corpo=[{'RecordID': 3, 'Name': 'Diego'}])
        saida = StringIO()

        with mock.patch.object(ClienteMethodCRM, 'de_settings', side_effect=api.cliente):
            call_command('sincronizar_crm', usuario='ana', stdout=saida)

        self.assertIn('1 contatos sincronizados', saida.getvalue())
        self.assertTrue(Contato.objects.filter(method_crm_id='3', usuario=self.usuario).exists())

    def test_usuario_inexistente(self):
        with self.assertRaises(CommandError):
            call_command('sincronizar_crm', usuario='ninguem', stdout=StringIO())

    def test_falha_da_api(self):
        api = ApiFalsa(status_code=500, texto='erro')

        with mock.patch.object(ClienteMethodCRM, 'de_settings', side_effect=api.cliente):
            with self.assertRaises(CommandError):
                call_command('sincronizar_crm', usuario='ana', stdout=StringIO())
