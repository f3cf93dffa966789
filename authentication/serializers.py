from rest_framework import serializers
from api.users.models import Usuario


class LoginSerializer(serializers.Serializer):
    correo = serializers.EmailField(
        required=True,
        error_messages={
            'required': 'El correo es requerido.',
            'invalid': 'Ingrese un correo válido.',
        }
    )

    password = serializers.CharField(
        required=True,
        style={'input_type': 'password'},
        write_only=True,
        trim_whitespace=False,
        error_messages={'required': 'La contraseña es requerida.'}
    )


class SignupSerializer(serializers.Serializer):
    nombre = serializers.CharField(
        max_length=150,
        error_messages={'required': 'El nombre es requerido.'}
    )
    correo = serializers.EmailField(
        error_messages={'required': 'El correo es requerido.'}
    )
    password = serializers.CharField(
        min_length=8,
        write_only=True,
        trim_whitespace=False,
        style={'input_type': 'password'},
        error_messages={
            'required': 'La contraseña es requerida.',
            'min_length': 'La contraseña debe tener al menos 8 caracteres.',
        }
    )

    def validate_nombre(self, value):
        if not value.strip():
            raise serializers.ValidationError("El nombre es requerido.")
        return value.strip()

    def validate_correo(self, value):
        return value.strip().lower()


class AuthUserSerializer(serializers.ModelSerializer):
    """Serializer para respuesta auth con rol"""

    class Meta:
        model = Usuario
        fields = [
            'id',
            'nombre',
            'correo',
            'rol',
            'is_active',
            'ultimo_acceso',
            'fecha_creacion',
        ]
        read_only_fields = fields
