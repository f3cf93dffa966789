from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models
from django.core.exceptions import ValidationError
import bcrypt
import uuid


class UsuarioManager(BaseUserManager):
    def create_user(self, correo, nombre, password=None, **extra_fields):
        if not correo:
            raise ValueError('El usuario debe tener un correo electrónico')
        if not nombre:
            raise ValueError('El usuario debe tener un nombre')

        correo = self.normalize_email(correo).lower()
        usuario = self.model(correo=correo, nombre=nombre, **extra_fields)

        if password:
            usuario.set_password(password)

        usuario.save(using=self._db)
        return usuario

    def create_superuser(self, correo, nombre, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('rol', Usuario.ROL_ADMIN)
        extra_fields.setdefault('is_active', True)

        return self.create_user(correo, nombre, password, **extra_fields)

    def get_by_natural_key(self, correo):
        return self.get(correo__iexact=correo)


class Usuario(AbstractBaseUser):
    ROL_CODIFICADOR = 'codificador'
    ROL_FINANZAS = 'finanzas'
    ROL_GESTION = 'gestion'
    ROL_ADMIN = 'admin'

    ROLES = [
        (ROL_CODIFICADOR, 'Codificador'),
        (ROL_FINANZAS, 'Finanzas'),
        (ROL_GESTION, 'Gestión'),
        (ROL_ADMIN, 'Administrador'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    nombre = models.CharField(max_length=150)
    correo = models.EmailField(unique=True)
    rol = models.CharField(max_length=20, choices=ROLES, default=ROL_CODIFICADOR)

    # Campos requeridos por Django Admin
    is_staff = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    ultimo_acceso = models.DateTimeField(null=True, blank=True)
    fecha_creacion = models.DateTimeField(auto_now_add=True)
    fecha_modificacion = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'correo'
    EMAIL_FIELD = 'correo'
    REQUIRED_FIELDS = ['nombre']

    objects = UsuarioManager()

    def clean(self):
        if not self.nombre:
            raise ValidationError("El nombre es obligatorio.")
        if not self.correo:
            raise ValidationError("El correo electrónico es obligatorio.")
        if self.rol not in dict(self.ROLES):
            raise ValidationError("Debe asignarse un rol válido al usuario.")

    def set_password(self, password):
        """Hashea la contraseña usando bcrypt"""
        salt = bcrypt.gensalt()
        self.password = bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def check_password(self, password):
        """Verifica si la contraseña coincide con el hash"""
        if not self.password or password is None:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password.encode('utf-8'))
        except ValueError:
            # Hash con formato inválido
            return False

    @property
    def is_admin(self):
        return self.rol == self.ROL_ADMIN

    def get_full_name(self):
        return self.nombre

    def get_short_name(self):
        return self.nombre.split(' ')[0] if self.nombre else ''

    def has_perm(self, perm, obj=None):
        """¿Tiene el usuario un permiso específico?"""
        return self.is_staff

    def has_module_perms(self, app_label):
        """¿Tiene el usuario permisos para ver la app?"""
        return self.is_staff

    def __str__(self):
        return f'{self.correo} - {self.nombre} ({self.rol})'

    class Meta:
        verbose_name = 'Usuario'
        verbose_name_plural = 'Usuarios'
        ordering = ['-fecha_creacion']
