# apps/crm/management/commands/sincronizar_crm.py

import httpx
from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from apps.core.models import Usuario
from apps.crm.cliente import ClienteMethodCRM
from apps.crm.exceptions import ErroCRM
from apps.crm.servico import ServicoSyncCRM


class Command(BaseCommand):
    help = 'Importa os contatos do Method CRM para um usuário'

    def add_arguments(self, parser):
        parser.add_argument('--usuario', required=True, help='username do dono dos contatos')

    def handle(self, *args, **options):
        try:
            usuario = Usuario.objects.get(username=options['usuario'])
        except Usuario.DoesNotExist:
            raise CommandError(f"Usuário '{options['usuario']}' não encontrado")

        self.stdout.write(f'🔄 Sincronizando contatos de {usuario.username}...')

        try:
            resultado = async_to_sync(self._sincronizar)(usuario.pk)
        except (ErroCRM, httpx.HTTPError) as e:
            raise CommandError(f'❌ Falha na sincronização: {e}')

        self.stdout.write(self.style.SUCCESS(f"✅ {resultado['count']} contatos sincronizados"))

    async def _sincronizar(self, usuario_id):
        cliente = ClienteMethodCRM.de_settings()
        try:
            return await ServicoSyncCRM(cliente).sincronizar_contatos(usuario_id)
        finally:
            await cliente.aclose()
