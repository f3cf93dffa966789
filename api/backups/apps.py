from django.apps import AppConfig


class BackupsConfig(AppConfig):
    """
    Respaldos documentales de episodios almacenados en S3/MinIO.
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.backups'
    label = 'backups'
    verbose_name = 'Respaldos de Episodios'

    def ready(self):
        import api.backups.signals  # noqa
