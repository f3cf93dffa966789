import datetime

import factory
from .models import Episodio, Grd, Paciente


class PacienteFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Paciente

    rut = factory.Sequence(lambda n: f'{10000000 + n}-{n % 10}')
    nombre = factory.Faker('name', locale='es_CL')
    edad = 45
    sexo = 'F'


class GrdFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Grd

    codigo = factory.Sequence(lambda n: f'{51400 + n}')
    descripcion = 'Procedimientos cardiovasculares'
    peso = 1.5
    precio_base_tramo = 1000000
    punto_corte_inf = 2
    punto_corte_sup = 10


class EpisodioFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Episodio

    centro = 'Hospital Clínico UC'
    numero_folio = factory.Sequence(lambda n: f'F-{n}')
    episodio_cmbd = factory.Sequence(lambda n: f'{1000 + n}')
    tipo_episodio = 'Hospitalizado'
    fecha_ingreso = datetime.date(2024, 3, 10)
    fecha_alta = datetime.date(2024, 3, 15)
    servicio_alta = 'Medicina Interna'
    tipo_alta = 'Domicilio'
    validado = True
    paciente = factory.SubFactory(PacienteFactory)
    grd = factory.SubFactory(GrdFactory)
