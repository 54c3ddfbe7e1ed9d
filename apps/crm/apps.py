# apps/crm/apps.py

from django.apps import AppConfig


class CrmConfig(AppConfig):
    """Configuração da app CRM"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.crm'
    verbose_name = 'CRM - Integração Method'
