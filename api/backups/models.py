# api/backups/models.py
from django.conf import settings
from django.db import models

from api.episodes.models import Episodio


class Respaldo(models.Model):
    """Archivo de respaldo (epicrisis, PDF, etc.) asociado a un episodio"""

    # Metadatos del archivo
    filename = models.CharField(max_length=255)
    file_type = models.CharField(max_length=100, blank=True, default='')
    size_bytes = models.BigIntegerField()

    # Metadatos del storage (fuera de la base de datos)
    storage_key = models.CharField(max_length=1024, help_text="Ruta completa dentro del bucket")
    bucket = models.CharField(max_length=255, blank=True, default='')

    episodio = models.ForeignKey(Episodio, on_delete=models.CASCADE, related_name='respaldos')

    # Auditoría
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='respaldos'
    )
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'respaldo'
        verbose_name = 'Respaldo'
        verbose_name_plural = 'Respaldos'
        ordering = ['-uploaded_at', '-id']
        indexes = [
            models.Index(fields=['episodio', 'uploaded_at']),
        ]

    def __str__(self):
        return f'{self.filename} (episodio {self.episodio_id})'
