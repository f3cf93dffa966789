from django.db.models.signals import pre_save, post_save
from django.dispatch import receiver
import logging

from .models import Usuario

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Usuario)
def sincronizar_acceso_admin(sender, instance, **kwargs):
    """
    Solo los administradores entran al Django Admin (donde se mantienen
    episodios y GRD).
    """
    instance.is_staff = instance.rol == Usuario.ROL_ADMIN


@receiver(post_save, sender=Usuario)
def log_usuario_creado(sender, instance, created, **kwargs):
    """
    Solo para logging - NO modifica nada
    """
    if created:
        logger.info(f"Usuario creado: {instance.correo} - Rol: {instance.rol}")
