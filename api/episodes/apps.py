from django.apps import AppConfig


class EpisodesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.episodes'
    label = 'episodes'
    verbose_name = 'Episodios GRD'
