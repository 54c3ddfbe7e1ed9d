#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Fluxo Board - Kanban com sincronização Method CRM
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Configuração padrão para desenvolvimento
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import call_command, execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Comandos customizados do Fluxo Board
    if len(sys.argv) > 1:
        command = sys.argv[1]

        # Comando de setup inicial
        if command == 'setup':
            import django

            django.setup()
            print("🚀 Configurando Fluxo Board...")

            # Executar migrações
            print("📊 Aplicando migrações...")
            call_command('migrate', interactive=False)

            # Criar superusuário se não existir
            print("👤 Verificando superusuário...")
            from apps.core.models import Usuario

            if not Usuario.objects.filter(is_superuser=True).exists():
                Usuario.objects.create_superuser('admin', 'admin@fluxo.local', 'admin123')
                print("🔑 Superusuário criado: admin/admin123")

            # Dados de demonstração
            print("🌱 Populando banco com dados demo...")
            call_command('seed')

            print("✅ Setup concluído!")
            return

        # Backup em JSON
        elif command == 'backup':
            import django
            from datetime import datetime

            django.setup()
            print("💾 Criando backup do banco...")
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            backup_file = f"backup_fluxo_{timestamp}.json"
            call_command('dumpdata', 'core', indent=2, output=backup_file)
            print(f"✅ Backup criado: {backup_file}")
            return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
