# api/backups/signals.py
"""
Mantiene sincronizados la base de datos y el storage de respaldos.
"""
import logging

from django.db.models.signals import post_delete
from django.dispatch import receiver

from common.services.storage_service import StorageService
from .models import Respaldo

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=Respaldo)
def delete_file_from_storage(sender, instance, **kwargs):
    """
    Elimina el archivo de S3/MinIO cuando se borra el registro en BD.
    Si el storage falla solo se registra; la fila ya fue eliminada.
    """
    if not instance.storage_key:
        logger.warning(f"Respaldo {instance.id} no tiene storage_key definido. Skip eliminación.")
        return

    storage = StorageService()
    if not storage.check_file_exists(instance.storage_key):
        logger.warning(
            f"Respaldo {instance.id} ya no existe en el storage: {instance.storage_key}. Skip eliminación."
        )
        return

    deleted = storage.delete_file(instance.storage_key)

    if deleted:
        logger.info(
            f"Respaldo eliminado del storage: {instance.storage_key} "
            f"(Episodio: {instance.episodio_id}, Size: {instance.size_bytes} bytes)"
        )
    else:
        logger.warning(
            f"No se pudo eliminar respaldo del storage: {instance.storage_key} "
            f"(puede que ya no exista)"
        )
