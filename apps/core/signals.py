# apps/core/signals.py

import logging

from django.db.models.signals import post_delete, pre_save
from django.dispatch import receiver

from .models import Board, Tarefa

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Tarefa)
def registrar_mudanca_status(sender, instance, **kwargs):
    """
    Registra no log quando a tarefa muda de coluna
    """
    if not instance.pk:
        return

    status_anterior = sender.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
    if status_anterior is None or status_anterior == instance.status:
        return

    if instance.status == 'done':
        logger.info(f"🏁 Tarefa '{instance.titulo}' foi concluída!")
    else:
        logger.info(f"➡️ Tarefa '{instance.titulo}': {status_anterior} -> {instance.status}")


@receiver(post_delete, sender=Board)
def registrar_exclusao_board(sender, instance, **kwargs):
    logger.info(f"🗑️ Board '{instance.nome}' excluído (usuário {instance.usuario_id})")
