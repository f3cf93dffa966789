# api/agreement_prices/models.py
import uuid

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django_currentuser.db.models import CurrentUserField


class PrecioConvenio(models.Model):
    """
    Precio base de un convenio, por tramo de peso GRD (FNS012, FNS026)
    o único (FNS019, CH0041).
    """
    TRAMOS = [
        ('T1', 'Tramo 1 (peso ≤ 1,5)'),
        ('T2', 'Tramo 2 (1,5 < peso ≤ 2,5)'),
        ('T3', 'Tramo 3 (peso > 2,5)'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    aseguradora = models.CharField(max_length=100, blank=True, default='')
    nombre_asegi = models.CharField(max_length=200, blank=True, default='', verbose_name='Nombre aseguradora')
    convenio = models.CharField(max_length=50, blank=True, default='', db_index=True)
    descr_convenio = models.CharField(max_length=255, blank=True, default='', verbose_name='Descripción convenio')
    tipo_asegurad = models.CharField(max_length=100, blank=True, default='', verbose_name='Tipo asegurado')
    tipo_convenio = models.CharField(max_length=100, blank=True, default='')
    tramo = models.CharField(max_length=2, choices=TRAMOS, null=True, blank=True)
    fecha_admision = models.DateField(null=True, blank=True)
    fecha_fin = models.DateField(null=True, blank=True)
    precio = models.FloatField(default=0, validators=[MinValueValidator(0)])

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
        db_table = 'precios_convenios'
        verbose_name = 'Precio de convenio'
        verbose_name_plural = 'Precios de convenios'
        ordering = ['-fecha_creacion']

    def clean(self):
        if self.fecha_admision and self.fecha_fin and self.fecha_fin < self.fecha_admision:
            raise ValidationError({'fecha_fin': 'fecha_fin debe ser mayor o igual a fecha_admision'})

    def __str__(self):
        tramo = f' {self.tramo}' if self.tramo else ''
        return f'{self.convenio}{tramo}: {self.precio}'
