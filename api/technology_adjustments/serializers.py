# api/technology_adjustments/serializers.py
from rest_framework import serializers
from .models import AjusteTecnologia


class AjusteTecnologiaSerializer(serializers.ModelSerializer):
    """
    Ambos campos son opcionales para permitir guardar campo por campo.
    null se guarda como '' (at) o 0 (monto).
    """
    at = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    monto = serializers.FloatField(
        required=False,
        allow_null=True,
        min_value=0,
        error_messages={'min_value': 'El monto no puede ser negativo.'}
    )

    class Meta:
        model = AjusteTecnologia
        fields = [
            'id', 'at', 'monto',
            'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion'
        ]
        read_only_fields = [
            'id', 'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion'
        ]

    def validate_at(self, value):
        return (value or '').strip()

    def validate_monto(self, value):
        return 0 if value is None else value

    def create(self, validated_data):
        validated_data.setdefault('at', '')
        validated_data.setdefault('monto', 0)
        return super().create(validated_data)
