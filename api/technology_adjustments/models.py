# api/technology_adjustments/models.py
import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django_currentuser.db.models import CurrentUserField


class AjusteTecnologia(models.Model):
    """Tabla de referencia de ajustes por tecnología (AT) y su monto"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    at = models.CharField(max_length=255, blank=True, default='', verbose_name='AT')
    monto = models.FloatField(default=0, validators=[MinValueValidator(0)])

    # Auditoría
    creado_por = CurrentUserField(
        related_name='%(class)s_creado_por',
        null=True,
        blank=True,
        editable=False
    )
    actualizado_por = CurrentUserField(
        on_update=True,
        related_name='%(class)s_actualizado_por',
        null=True,
        blank=True,
        editable=False
    )
    fecha_creacion = models.DateTimeField(auto_now_add=True)
    fecha_modificacion = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ajustes_tecnologia'
        verbose_name = 'Ajuste por tecnología'
        verbose_name_plural = 'Ajustes por tecnología'
        ordering = ['at']

    def __str__(self):
        return f'{self.at or "(sin AT)"}: {self.monto}'
