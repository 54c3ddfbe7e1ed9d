# apps/core/management/commands/seed.py

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.core.models import Board, Contato, Tarefa, Usuario


TAREFAS_DEMO = [
    ('Definir escopo do sprint', 'todo', 'high', 2),
    ('Revisar contatos importados', 'todo', 'medium', 5),
    ('Configurar integração Method CRM', 'progress', 'high', 1),
    ('Escrever documentação da API', 'progress', 'low', None),
    ('Criar board inicial', 'done', 'medium', None),
]


class Command(BaseCommand):
    help = 'Cria usuário, board, tarefas e contatos de demonstração'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='demo', help='Usuário a criar (padrão: demo)')
        parser.add_argument('--senha', default='demo123', help='Senha do usuário (padrão: demo123)')

    def handle(self, *args, **options):
        username = options['username']

        self.stdout.write('🌱 Criando dados de demonstração...')

        if Usuario.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f'⚠️ Usuário {username} já existe, nada foi criado'))
            return

        with transaction.atomic():
            usuario = Usuario.objects.create_user(
                username=username,
                password=options['senha'],
                email=f'{username}@fluxo.local',
                first_name='Demo',
            )
            self.stdout.write(f'  👤 Usuário: {usuario.username}')

            board = Board.objects.create(
                nome='Meu Primeiro Board',
                descricao='Board criado pelo seed',
                cor='blue',
                usuario=usuario,
            )
            self.stdout.write(f'  📋 Board: {board.nome}')

            agora = timezone.now()
            for titulo, status, prioridade, dias in TAREFAS_DEMO:
                Tarefa.objects.create(
                    titulo=titulo,
                    status=status,
                    prioridade=prioridade,
                    prazo=agora + timedelta(days=dias) if dias is not None else None,
                    board=board,
                    usuario=usuario,
                )
            self.stdout.write(f'  ✅ {len(TAREFAS_DEMO)} tarefas criadas')

            Contato.objects.create(
                nome='Maria Souza',
                email='maria@exemplo.com',
                empresa='Exemplo Ltda',
                usuario=usuario,
            )

        self.stdout.write(
            self.style.SUCCESS(
                f'\n✅ Dados de demonstração criados!\n'
                f'Login: {username} / {options["senha"]}\n'
            )
        )
