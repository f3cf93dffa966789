from rest_framework import serializers
from .models import Usuario


ROLES_VALIDOS = [codigo for codigo, _ in Usuario.ROLES]


class UsuarioSerializer(serializers.ModelSerializer):
    """Serializer para lectura de usuarios"""
    class Meta:
        model = Usuario
        fields = [
            'id', 'nombre', 'correo', 'rol', 'is_active',
            'ultimo_acceso', 'fecha_creacion', 'fecha_modificacion'
        ]
        read_only_fields = fields


class UsuarioCreateSerializer(serializers.ModelSerializer):
    """Serializer para creación de usuarios"""
    password = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'},
        min_length=8,
        error_messages={
            'min_length': 'La contraseña debe tener al menos 8 caracteres.',
            'required': 'La contraseña es requerida.'
        }
    )
    rol = serializers.CharField(required=False, default=Usuario.ROL_CODIFICADOR)

    class Meta:
        model = Usuario
        fields = ['id', 'nombre', 'correo', 'rol', 'password', 'is_active']
        read_only_fields = ['id']
        extra_kwargs = {
            # La unicidad se valida en validate_correo (sin distinguir mayúsculas)
            'correo': {'validators': []},
        }

    def validate_nombre(self, value):
        if not value or len(value.strip()) == 0:
            raise serializers.ValidationError("El nombre es requerido.")
        return value.strip()

    def validate_correo(self, value):
        if not value:
            raise serializers.ValidationError("El correo electrónico es requerido.")
        value = value.strip().lower()
        if Usuario.objects.filter(correo__iexact=value).exists():
            raise serializers.ValidationError("Este correo electrónico ya está registrado.")
        return value

    def validate_rol(self, value):
        if value not in ROLES_VALIDOS:
            raise serializers.ValidationError(
                f"Rol inválido. Los roles válidos son: {', '.join(ROLES_VALIDOS)}"
            )
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        return Usuario.objects.create_user(password=password, **validated_data)


class UsuarioUpdateSerializer(serializers.ModelSerializer):
    """Serializer para actualización de usuarios"""
    password = serializers.CharField(
        write_only=True,
        required=False,
        style={'input_type': 'password'},
        min_length=8,
        allow_blank=True,
        help_text='Dejar en blanco para mantener la contraseña actual'
    )

    class Meta:
        model = Usuario
        fields = ['nombre', 'correo', 'rol', 'is_active', 'password']
        extra_kwargs = {
            'correo': {'validators': []},
        }

    def validate_correo(self, value):
        if not value:
            raise serializers.ValidationError("El correo electrónico es requerido.")
        value = value.strip().lower()

        # Verificar si el correo ya existe (excepto el usuario actual)
        usuario_actual = self.instance
        if Usuario.objects.filter(correo__iexact=value).exclude(pk=usuario_actual.pk).exists():
            raise serializers.ValidationError("Este correo electrónico ya está registrado.")

        return value

    def validate_rol(self, value):
        if value not in ROLES_VALIDOS:
            raise serializers.ValidationError(
                f"Rol inválido. Los roles válidos son: {', '.join(ROLES_VALIDOS)}"
            )
        return value

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        # Solo cambiar password si se proporciona
        if password:
            instance.set_password(password)

        instance.save()
        return instance
