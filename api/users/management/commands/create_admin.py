from django.core.management.base import BaseCommand, CommandError

from api.users.models import Usuario


class Command(BaseCommand):
    help = 'Crea un usuario administrador inicial'

    def add_arguments(self, parser):
        parser.add_argument('--correo', default='admin@ucchristus.cl')
        parser.add_argument('--nombre', default='Administrador GRD')
        parser.add_argument('--password', required=True)

    def handle(self, *args, **options):
        correo = options['correo'].lower()

        # Verificar si ya existe un administrador con ese correo
        if Usuario.objects.filter(correo__iexact=correo).exists():
            raise CommandError(f'Ya existe un usuario con correo {correo}')

        admin = Usuario.objects.create_superuser(
            correo=correo,
            nombre=options['nombre'],
            password=options['password'],
        )

        self.stdout.write(
            self.style.SUCCESS(f'Usuario administrador creado: {admin.correo}')
        )
