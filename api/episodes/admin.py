# api/episodes/admin.py
from django.contrib import admin
from .models import Episodio, Grd, Paciente


@admin.register(Paciente)
class PacienteAdmin(admin.ModelAdmin):
    list_display = ('rut', 'nombre', 'edad', 'sexo')
    search_fields = ('rut', 'nombre')
    list_filter = ('sexo',)


@admin.register(Grd)
class GrdAdmin(admin.ModelAdmin):
    list_display = ('codigo', 'descripcion', 'peso', 'precio_base_tramo', 'punto_corte_inf', 'punto_corte_sup')
    search_fields = ('codigo', 'descripcion')


@admin.register(Episodio)
class EpisodioAdmin(admin.ModelAdmin):

    # ================== CONFIGURACIÓN DE LISTADO ==================
    list_display = (
        'episodio_cmbd',
        'centro',
        'paciente',
        'grd',
        'fecha_ingreso',
        'fecha_alta',
        'estado_validacion_display',
        'monto_final',
    )
    list_filter = ('validado', 'centro', 'tipo_episodio', 'fecha_ingreso')
    search_fields = ('episodio_cmbd', 'numero_folio', 'centro', 'paciente__rut', 'paciente__nombre')
    autocomplete_fields = ('paciente', 'grd')
    date_hierarchy = 'fecha_ingreso'
    readonly_fields = ('created_at', 'updated_at')

    # ================== FORMULARIO ==================
    fieldsets = (
        ('Identificación', {
            'fields': ('centro', 'numero_folio', 'episodio_cmbd', 'id_derivacion', 'tipo_episodio', 'convenio', 'paciente')
        }),
        ('Estadía', {
            'fields': ('fecha_ingreso', 'fecha_alta', 'servicio_alta', 'tipo_alta', 'estado_rn', 'dias_estada')
        }),
        ('GRD y valorización', {
            'fields': (
                'grd', 'inlier_outlier', 'grupo_en_norma', 'precio_base_tramo', 'valor_grd',
                'at_sn', 'at_detalle', 'monto_at', 'monto_rn',
                'dias_demora_rescate', 'pago_demora_rescate', 'pago_outlier_superior', 'monto_final',
            )
        }),
        ('Validación', {
            'fields': ('validado', 'documentacion')
        }),
        ('Auditoría', {
            'classes': ('collapse',),
            'fields': ('created_at', 'updated_at')
        }),
    )

    @admin.display(description='Validación')
    def estado_validacion_display(self, obj):
        return obj.estado_validacion
