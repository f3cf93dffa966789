# api/backups/serializers.py
from rest_framework import serializers

from common.services.storage_service import StorageService
from .models import Respaldo


class RespaldoSerializer(serializers.ModelSerializer):
    """Respaldo con quién lo subió y URL de descarga (expira en 1 hora)"""
    usuario = serializers.SerializerMethodField()
    download_url = serializers.SerializerMethodField()

    class Meta:
        model = Respaldo
        fields = [
            'id', 'episodio', 'filename', 'file_type', 'size_bytes',
            'storage_key', 'bucket', 'uploaded_at', 'usuario', 'download_url'
        ]
        read_only_fields = fields

    def get_usuario(self, obj):
        usuario = obj.uploaded_by
        return {
            'id': str(usuario.id),
            'nombre': usuario.nombre,
            'correo': usuario.correo,
        }

    def get_download_url(self, obj):
        storage = self.context.get('storage') or StorageService()
        return storage.generate_view_url(
            obj.storage_key,
            expiration=3600,
            download_name=obj.filename
        )
