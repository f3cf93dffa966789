from django.apps import AppConfig


class TechnologyAdjustmentsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.technology_adjustments'
    label = 'technology_adjustments'
    verbose_name = 'Ajustes por Tecnología'
