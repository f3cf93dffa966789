# api/episodes/models.py
from django.core.validators import MinValueValidator
from django.db import models


MONTO_VALIDATORS = [MinValueValidator(0)]


class Paciente(models.Model):
    """Paciente asociado a uno o más episodios"""
    SEXOS = [
        ('M', 'Masculino'),
        ('F', 'Femenino'),
        ('O', 'Otro'),
    ]

    rut = models.CharField(max_length=12, unique=True, verbose_name="RUT")
    nombre = models.CharField(max_length=200, verbose_name="Nombre completo")
    edad = models.PositiveIntegerField(null=True, blank=True)
    sexo = models.CharField(max_length=1, choices=SEXOS, blank=True, default='')

    class Meta:
        db_table = 'paciente'
        verbose_name = "Paciente"
        verbose_name_plural = "Pacientes"
        ordering = ['nombre']

    def __str__(self):
        return f"{self.rut} - {self.nombre}"


class Grd(models.Model):
    """Grupo Relacionado por Diagnóstico con su norma de estada"""
    codigo = models.CharField(max_length=20, unique=True, verbose_name="Código IR-GRD")
    descripcion = models.CharField(max_length=255, blank=True, default='')
    peso = models.FloatField(null=True, blank=True)
    precio_base_tramo = models.FloatField(null=True, blank=True)
    punto_corte_inf = models.PositiveIntegerField(null=True, blank=True, verbose_name="Punto de corte inferior (días)")
    punto_corte_sup = models.PositiveIntegerField(null=True, blank=True, verbose_name="Punto de corte superior (días)")

    class Meta:
        db_table = 'grd'
        verbose_name = "GRD"
        verbose_name_plural = "GRD"
        ordering = ['codigo']

    @property
    def tiene_norma(self):
        return self.punto_corte_inf is not None and self.punto_corte_sup is not None

    def __str__(self):
        return f"{self.codigo} - {self.descripcion}" if self.descripcion else self.codigo


class Episodio(models.Model):
    """Episodio hospitalario facturable por GRD"""

    # Identificación
    centro = models.CharField(max_length=200, blank=True, default='')
    numero_folio = models.CharField(max_length=50, blank=True, default='')
    episodio_cmbd = models.CharField(max_length=50, blank=True, default='', db_index=True)
    id_derivacion = models.CharField(max_length=50, blank=True, default='')
    tipo_episodio = models.CharField(max_length=50, blank=True, default='')
    convenio = models.CharField(max_length=100, blank=True, default='')

    # Fechas y alta
    fecha_ingreso = models.DateField(null=True, blank=True, db_index=True)
    fecha_alta = models.DateField(null=True, blank=True)
    servicio_alta = models.CharField(max_length=200, blank=True, default='')
    tipo_alta = models.CharField(max_length=100, blank=True, default='')
    estado_rn = models.CharField(max_length=50, blank=True, default='')

    # Ajuste por tecnología
    at_sn = models.BooleanField(null=True, blank=True, verbose_name="AT (S/N)")
    at_detalle = models.CharField(max_length=255, blank=True, default='')
    monto_at = models.FloatField(null=True, blank=True, validators=MONTO_VALIDATORS)

    # Montos
    monto_rn = models.FloatField(null=True, blank=True, validators=MONTO_VALIDATORS)
    dias_demora_rescate = models.PositiveIntegerField(null=True, blank=True)
    pago_demora_rescate = models.FloatField(null=True, blank=True, validators=MONTO_VALIDATORS)
    pago_outlier_superior = models.FloatField(null=True, blank=True, validators=MONTO_VALIDATORS)
    precio_base_tramo = models.FloatField(null=True, blank=True, validators=MONTO_VALIDATORS)
    valor_grd = models.FloatField(null=True, blank=True, validators=MONTO_VALIDATORS)
    monto_final = models.FloatField(null=True, blank=True, validators=MONTO_VALIDATORS)

    # Clasificación
    documentacion = models.JSONField(null=True, blank=True, verbose_name="Documentación necesaria")
    inlier_outlier = models.CharField(max_length=30, blank=True, default='')
    grupo_en_norma = models.BooleanField(null=True, blank=True)
    dias_estada = models.PositiveIntegerField(null=True, blank=True)

    # Validación: None = pendiente
    validado = models.BooleanField(null=True, blank=True)

    paciente = models.ForeignKey(
        Paciente, on_delete=models.PROTECT, null=True, blank=True, related_name='episodios'
    )
    grd = models.ForeignKey(
        Grd, on_delete=models.PROTECT, null=True, blank=True, related_name='episodios'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'episodio'
        verbose_name = "Episodio"
        verbose_name_plural = "Episodios"
        ordering = ['fecha_ingreso', 'id']
        indexes = [
            models.Index(fields=['centro', 'fecha_ingreso']),
        ]

    @property
    def estado_validacion(self):
        if self.validado is None:
            return 'Pendiente'
        return 'Aprobado' if self.validado else 'Rechazado'

    def __str__(self):
        return f"Episodio {self.episodio_cmbd or self.pk} ({self.centro})"
