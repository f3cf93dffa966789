from django.apps import AppConfig


class SystemLogsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.system_logs'
    label = 'system_logs'
    verbose_name = 'Logs del Sistema'
