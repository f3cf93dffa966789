from rest_framework import serializers
from .models import LogSistema


class LogSistemaSerializer(serializers.ModelSerializer):
    """Formato de bitácora esperado por el panel de administración"""
    id = serializers.SerializerMethodField()
    user = serializers.SerializerMethodField()
    userName = serializers.SerializerMethodField()
    action = serializers.SerializerMethodField()
    timestamp = serializers.SerializerMethodField()
    type = serializers.SerializerMethodField()
    ip = serializers.SerializerMethodField()
    details = serializers.SerializerMethodField()

    class Meta:
        model = LogSistema
        fields = [
            'id', 'user', 'userName', 'action', 'timestamp', 'type',
            'ip', 'details', 'level', 'endpoint', 'metadata'
        ]

    def get_id(self, obj):
        return str(obj.id)

    def get_user(self, obj):
        return obj.usuario.correo if obj.usuario else 'sistema@ucchristus.cl'

    def get_userName(self, obj):
        return obj.usuario.nombre if obj.usuario else 'Sistema'

    def get_action(self, obj):
        return obj.action or obj.message or 'Acción desconocida'

    def get_timestamp(self, obj):
        return obj.created_at.strftime('%Y-%m-%d %H:%M:%S')

    def get_type(self, obj):
        return mapear_nivel_a_tipo(obj.level)

    def get_ip(self, obj):
        metadata = obj.metadata if isinstance(obj.metadata, dict) else {}
        return metadata.get('ip') or 'N/A'

    def get_details(self, obj):
        return obj.message or obj.endpoint or 'Sin detalles'


def mapear_nivel_a_tipo(level):
    nivel = (level or '').lower()
    if nivel in ('error', 'fatal', 'err'):
        return 'error'
    if nivel in ('warn', 'warning'):
        return 'warning'
    if nivel == 'success':
        return 'success'
    return 'info'
