# api/technology_adjustments/admin.py
from django.contrib import admin
from .models import AjusteTecnologia


@admin.register(AjusteTecnologia)
class AjusteTecnologiaAdmin(admin.ModelAdmin):
    list_display = ('at', 'monto', 'actualizado_por', 'fecha_modificacion')
    search_fields = ('at',)
    readonly_fields = ('creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion')
