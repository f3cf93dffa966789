# api/backups/admin.py
from django.contrib import admin
from .models import Respaldo


@admin.register(Respaldo)
class RespaldoAdmin(admin.ModelAdmin):
    list_display = ['filename', 'episodio', 'file_type', 'size_mb', 'uploaded_by', 'uploaded_at']
    list_filter = ['file_type', 'uploaded_at']
    search_fields = ['filename', 'episodio__episodio_cmbd', 'uploaded_by__correo']
    readonly_fields = ['bucket', 'storage_key', 'uploaded_at']

    @admin.display(description='Tamaño')
    def size_mb(self, obj):
        return f"{obj.size_bytes / 1024 / 1024:.2f} MB"
