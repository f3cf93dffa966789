from django.contrib.auth.backends import BaseBackend
from api.users.models import Usuario


class UsuarioAuthBackend(BaseBackend):
    """Autentica por correo (sin distinguir mayúsculas) y contraseña bcrypt."""

    def authenticate(self, request, correo=None, password=None, username=None, **kwargs):
        # Django Admin envía el identificador como 'username'
        correo = correo or username
        if not correo or password is None:
            return None
        try:
            usuario = Usuario.objects.get(correo__iexact=correo.strip())
        except Usuario.DoesNotExist:
            return None
        if usuario.check_password(password):
            return usuario
        return None

    def get_user(self, user_id):
        try:
            return Usuario.objects.get(pk=user_id, is_active=True)
        except Usuario.DoesNotExist:
            return None
