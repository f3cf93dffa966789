from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'authentication'
    label = 'authentication'
    verbose_name = 'Autenticación'

    def ready(self):
        """Conectar signals al iniciar app"""
        import authentication.signals  # noqa
