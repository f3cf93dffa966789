# api/agreement_prices/serializers.py
from rest_framework import serializers
from .models import PrecioConvenio

CAMPOS_TEXTO = [
    'aseguradora', 'nombre_asegi', 'convenio',
    'descr_convenio', 'tipo_asegurad', 'tipo_convenio',
]
FORMATOS_FECHA = ['%d-%m-%Y', 'iso-8601']


class PrecioConvenioSerializer(serializers.ModelSerializer):
    """
    Todos los campos son opcionales para permitir guardar campo por campo.
    Fechas en DD-MM-YYYY o YYYY-MM-DD.
    """
    tramo = serializers.ChoiceField(
        choices=PrecioConvenio.TRAMOS, required=False, allow_blank=True, allow_null=True
    )
    fecha_admision = serializers.DateField(required=False, allow_null=True, input_formats=FORMATOS_FECHA)
    fecha_fin = serializers.DateField(required=False, allow_null=True, input_formats=FORMATOS_FECHA)
    precio = serializers.FloatField(
        required=False,
        allow_null=True,
        min_value=0,
        error_messages={'min_value': 'El precio no puede ser negativo.'}
    )

    class Meta:
        model = PrecioConvenio
        fields = [
            'id', 'aseguradora', 'nombre_asegi', 'convenio', 'descr_convenio',
            'tipo_asegurad', 'tipo_convenio', 'tramo',
            'fecha_admision', 'fecha_fin', 'precio',
            'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion'
        ]
        read_only_fields = [
            'id', 'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion'
        ]
        extra_kwargs = {
            campo: {'required': False, 'allow_blank': True, 'allow_null': True}
            for campo in CAMPOS_TEXTO
        }

    def validate_convenio(self, value):
        return (value or '').strip().upper()

    def validate_tramo(self, value):
        return value or None

    def validate_precio(self, value):
        return 0 if value is None else value

    def validate(self, attrs):
        for campo in CAMPOS_TEXTO:
            if campo in attrs and attrs[campo] is None:
                attrs[campo] = ''

        # En PATCH la otra fecha puede venir de la BD
        fecha_admision = attrs.get('fecha_admision', getattr(self.instance, 'fecha_admision', None))
        fecha_fin = attrs.get('fecha_fin', getattr(self.instance, 'fecha_fin', None))
        if fecha_admision and fecha_fin and fecha_fin < fecha_admision:
            raise serializers.ValidationError(
                {'fecha_fin': 'fecha_fin debe ser mayor o igual a fecha_admision'}
            )
        return attrs
