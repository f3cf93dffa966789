from django.contrib import admin
from .models import Usuario


@admin.register(Usuario)
class UsuarioAdmin(admin.ModelAdmin):
    list_display = ('correo', 'nombre', 'rol', 'is_staff', 'is_active', 'ultimo_acceso')
    list_filter = ('rol', 'is_staff', 'is_active')
    search_fields = ('correo', 'nombre')
    readonly_fields = ('password', 'ultimo_acceso', 'fecha_creacion', 'fecha_modificacion')
    ordering = ('correo',)

    fieldsets = (
        (None, {
            'fields': ('correo', 'password')
        }),
        ('Información Personal', {
            'fields': ('nombre', 'rol')
        }),
        ('Permisos', {
            'fields': ('is_active', 'is_staff')
        }),
        ('Auditoría', {
            'fields': ('ultimo_acceso', 'fecha_creacion', 'fecha_modificacion')
        }),
    )
