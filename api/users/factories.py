import factory
from .models import Usuario


class UsuarioFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Usuario

    nombre = factory.Faker('name', locale='es_CL')
    correo = factory.Sequence(lambda n: f'usuario{n}@ucchristus.cl')
    rol = Usuario.ROL_CODIFICADOR
    is_active = True
    password = 'Clave12345'

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        # Pasa por create_user para hashear la contraseña con bcrypt
        manager = cls._get_manager(model_class)
        return manager.create_user(*args, **kwargs)
