from django.conf import settings
from django.db import models


class LogSistema(models.Model):
    """Bitácora persistente de acciones relevantes del sistema."""

    class Nivel(models.TextChoices):
        INFO = 'info', 'Info'
        SUCCESS = 'success', 'Éxito'
        WARN = 'warn', 'Advertencia'
        ERROR = 'error', 'Error'

    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='logs'
    )
    endpoint = models.CharField(max_length=255, blank=True, default='')
    action = models.CharField(max_length=255)
    level = models.CharField(max_length=10, choices=Nivel.choices, default=Nivel.INFO)
    message = models.TextField(blank=True, default='')
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'log_sistema'
        verbose_name = 'Log del sistema'
        verbose_name_plural = 'Logs del sistema'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['level', 'created_at']),
        ]

    def __str__(self):
        return f'[{self.level}] {self.action} ({self.created_at:%Y-%m-%d %H:%M:%S})'
