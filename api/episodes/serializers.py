# api/episodes/serializers.py
from rest_framework import serializers
from .models import Episodio, Grd, Paciente

ESTADOS_RN = ['Aprobado', 'Pendiente', 'Rechazado']


class SiNoField(serializers.BooleanField):
    """Booleano que además acepta S/N"""
    TRUE_VALUES = serializers.BooleanField.TRUE_VALUES | {'S', 's'}
    FALSE_VALUES = serializers.BooleanField.FALSE_VALUES | {'N', 'n'}


class PacienteResumenSerializer(serializers.ModelSerializer):
    class Meta:
        model = Paciente
        fields = ['id', 'rut', 'nombre']


class GrdResumenSerializer(serializers.ModelSerializer):
    class Meta:
        model = Grd
        fields = ['id', 'codigo', 'descripcion', 'peso', 'punto_corte_inf', 'punto_corte_sup']


class EpisodioSerializer(serializers.ModelSerializer):
    paciente_detalle = PacienteResumenSerializer(source='paciente', read_only=True)
    grd_detalle = GrdResumenSerializer(source='grd', read_only=True)
    estado_validacion = serializers.CharField(read_only=True)

    at_sn = SiNoField(required=False, allow_null=True)
    at_detalle = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    estado_rn = serializers.ChoiceField(
        choices=ESTADOS_RN,
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={'invalid_choice': 'Estado inválido. Use: Aprobado, Pendiente o Rechazado'}
    )

    class Meta:
        model = Episodio
        fields = [
            'id', 'centro', 'numero_folio', 'episodio_cmbd', 'id_derivacion',
            'tipo_episodio', 'convenio',
            'fecha_ingreso', 'fecha_alta', 'servicio_alta', 'tipo_alta', 'estado_rn',
            'at_sn', 'at_detalle', 'monto_at',
            'monto_rn', 'dias_demora_rescate', 'pago_demora_rescate', 'pago_outlier_superior',
            'precio_base_tramo', 'valor_grd', 'monto_final',
            'documentacion', 'inlier_outlier', 'grupo_en_norma', 'dias_estada',
            'validado', 'estado_validacion',
            'paciente', 'paciente_detalle', 'grd', 'grd_detalle',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_estado_rn(self, value):
        return value or ''

    def validate(self, attrs):
        fecha_ingreso = attrs.get('fecha_ingreso', getattr(self.instance, 'fecha_ingreso', None))
        fecha_alta = attrs.get('fecha_alta', getattr(self.instance, 'fecha_alta', None))
        if fecha_ingreso and fecha_alta and fecha_alta < fecha_ingreso:
            raise serializers.ValidationError(
                {'fecha_alta': 'La fecha de alta no puede ser anterior a la fecha de ingreso'}
            )
        return attrs
