from django.contrib.auth.signals import user_login_failed
from django.dispatch import receiver
import logging

logger = logging.getLogger(__name__)


@receiver(user_login_failed)
def log_login_fallido(sender, credentials, request=None, **kwargs):
    """
    Solo para logging. Django ya limpia la contraseña de 'credentials'.
    """
    logger.warning(f"Intento de login fallido para: {credentials.get('correo') or credentials.get('username')}")
