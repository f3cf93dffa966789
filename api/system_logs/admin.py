# api/system_logs/admin.py
from django.contrib import admin
from .models import LogSistema


@admin.register(LogSistema)
class LogSistemaAdmin(admin.ModelAdmin):
    list_display = ['created_at', 'level', 'action', 'usuario', 'endpoint']
    list_filter = ['level', 'created_at']
    search_fields = ['action', 'message', 'usuario__correo']
    readonly_fields = ['usuario', 'endpoint', 'action', 'level', 'message', 'metadata', 'created_at']

    def has_add_permission(self, request):
        return False
