# api/agreement_prices/admin.py
from django.contrib import admin
from .models import PrecioConvenio


@admin.register(PrecioConvenio)
class PrecioConvenioAdmin(admin.ModelAdmin):
    list_display = ('convenio', 'tramo', 'precio', 'aseguradora', 'fecha_admision', 'fecha_fin', 'fecha_modificacion')
    list_filter = ('convenio', 'tramo')
    search_fields = ('convenio', 'descr_convenio', 'aseguradora')
    readonly_fields = ('creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion')
