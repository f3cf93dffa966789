# api/agreement_prices/tests/test_precio_convenio.py
import datetime
import uuid
from types import SimpleNamespace

import pytest
from django.urls import reverse
from rest_framework import status

from api.agreement_prices.models import PrecioConvenio
from api.agreement_prices.services.precio_convenio_service import (
    PrecioConvenioService,
    TablaPrecios,
    calcular_tramo,
)


@pytest.mark.django_db
class TestPrecioConvenioAPI:
    """CRUD de precios por convenio"""

    def setup_method(self):
        self.list_url = reverse('agreement_prices:precio-convenio-list')

    def _detail_url(self, pk):
        return reverse('agreement_prices:precio-convenio-detail', kwargs={'pk': pk})

    def test_crear_con_fechas_dd_mm_yyyy(self, cliente_como, finanzas_user):
        response = cliente_como(finanzas_user).post(self.list_url, {
            'aseguradora': 'FONASA',
            'convenio': ' fns012 ',
            'tramo': 'T2',
            'fecha_admision': '01-01-2024',
            'fecha_fin': '2024-12-31',
            'precio': 900000,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        precio = PrecioConvenio.objects.get(pk=response.data['id'])
        assert precio.convenio == 'FNS012'
        assert precio.tramo == 'T2'
        assert precio.fecha_admision == datetime.date(2024, 1, 1)
        assert precio.fecha_fin == datetime.date(2024, 12, 31)

    def test_crear_vacio_usa_defectos(self, cliente_como, gestion_user):
        response = cliente_como(gestion_user).post(
            self.list_url, {'aseguradora': None, 'tramo': '', 'precio': None}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        precio = PrecioConvenio.objects.get(pk=response.data['id'])
        assert precio.aseguradora == ''
        assert precio.tramo is None
        assert precio.precio == 0

    def test_rango_de_fechas_invertido(self, cliente_como, finanzas_user):
        response = cliente_como(finanzas_user).post(self.list_url, {
            'fecha_admision': '2024-06-01',
            'fecha_fin': '2024-01-01',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'fecha_fin' in response.data['errors']

    def test_patch_valida_contra_fecha_guardada(self, cliente_como, finanzas_user):
        precio = PrecioConvenio.objects.create(
            convenio='CH0041', fecha_admision=datetime.date(2024, 6, 1), precio=1000
        )

        response = cliente_como(finanzas_user).patch(
            self._detail_url(precio.id), {'fecha_fin': '31-05-2024'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_parcial(self, cliente_como, finanzas_user):
        precio = PrecioConvenio.objects.create(convenio='FNS019', precio=500000)

        response = cliente_como(finanzas_user).patch(
            self._detail_url(precio.id), {'precio': 650000}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        precio.refresh_from_db()
        assert precio.precio == 650000
        assert precio.convenio == 'FNS019'

    def test_precio_negativo(self, cliente_como, finanzas_user):
        response = cliente_como(finanzas_user).post(self.list_url, {'precio': -5}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'precio' in response.data['errors']

    def test_tramo_invalido(self, cliente_como, finanzas_user):
        response = cliente_como(finanzas_user).post(self.list_url, {'tramo': 'T9'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_listado_mas_reciente_primero(self, cliente_como, gestion_user):
        antiguo = PrecioConvenio.objects.create(convenio='FNS012', tramo='T1', precio=1)
        PrecioConvenio.objects.filter(pk=antiguo.pk).update(
            fecha_creacion=datetime.datetime(2023, 1, 1, tzinfo=datetime.timezone.utc)
        )
        reciente = PrecioConvenio.objects.create(convenio='FNS012', tramo='T1', precio=2)

        response = cliente_como(gestion_user).get(self.list_url)

        assert response.status_code == status.HTTP_200_OK
        assert [p['id'] for p in response.data] == [str(reciente.id), str(antiguo.id)]

    def test_eliminar(self, cliente_como, finanzas_user):
        precio = PrecioConvenio.objects.create(convenio='FNS026', tramo='T3', precio=10)

        response = cliente_como(finanzas_user).delete(self._detail_url(precio.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(precio.id)
        assert response.data['message'] == 'Precio de convenio eliminado correctamente'
        assert not PrecioConvenio.objects.filter(pk=precio.id).exists()

    def test_inexistente(self, cliente_como, finanzas_user):
        response = cliente_como(finanzas_user).delete(self._detail_url(uuid.uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_put_no_permitido(self, cliente_como, finanzas_user):
        precio = PrecioConvenio.objects.create(convenio='FNS019', precio=1)

        response = cliente_como(finanzas_user).put(self._detail_url(precio.id), {'precio': 2}, format='json')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_codificador_sin_acceso(self, cliente_como, codificador_user):
        response = cliente_como(codificador_user).get(self.list_url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestCalcularTramo:

    @pytest.mark.parametrize('peso,tramo', [
        (0, 'T1'),
        (1.5, 'T1'),
        (1.51, 'T2'),
        (2.5, 'T2'),
        (2.6, 'T3'),
        (None, None),
        (-1, None),
    ])
    def test_limites(self, peso, tramo):
        assert calcular_tramo(peso) == tramo


def _precio(convenio, precio, tramo=None):
    return SimpleNamespace(convenio=convenio, tramo=tramo, precio=precio)


class TestTablaPrecios:

    def test_convenio_con_tramos(self):
        tabla = TablaPrecios([
            _precio('FNS012', 100, 'T1'),
            _precio('FNS012', 200, 'T2'),
            _precio('FNS012', 300, 'T3'),
        ])

        assert tabla.precio_base('FNS012', 1.0) == 100
        assert tabla.precio_base(' fns012 ', 2.0) == 200
        assert tabla.precio_base('FNS012', 4.0) == 300
        assert tabla.precio_base('FNS012', None) is None

    def test_precio_unico_ignora_tramo(self):
        tabla = TablaPrecios([_precio('CH0041', 55000, 'T1')])

        assert tabla.precio_base('CH0041', 9.0) == 55000
        assert tabla.precio_base('CH0041', None) == 55000

    def test_gana_el_primero(self):
        tabla = TablaPrecios([_precio('FNS019', 2), _precio('FNS019', 1)])

        assert tabla.precio_base('FNS019', 1.0) == 2

    def test_convenio_desconocido_o_vacio(self):
        tabla = TablaPrecios([_precio('OTRO', 10)])

        assert tabla.precio_base('OTRO', 1.0) is None
        assert tabla.precio_base('', 1.0) is None
        assert tabla.precio_base(None, 1.0) is None

    def test_precio_no_finito_se_ignora(self):
        tabla = TablaPrecios([_precio('FNS019', float('inf')), _precio('FNS019', 10)])

        assert tabla.precio_base('FNS019', 1.0) == 10


@pytest.mark.django_db
class TestPrecioConvenioService:

    def test_mas_reciente_gana(self):
        antiguo = PrecioConvenio.objects.create(convenio='FNS026', tramo='T2', precio=1)
        PrecioConvenio.objects.filter(pk=antiguo.pk).update(
            fecha_creacion=datetime.datetime(2023, 1, 1, tzinfo=datetime.timezone.utc)
        )
        PrecioConvenio.objects.create(convenio='FNS026', tramo='T2', precio=2)

        assert PrecioConvenioService.obtener_precio_base_tramo('FNS026', 2.0) == 2

    def test_sin_registros(self):
        assert PrecioConvenioService.obtener_precio_base_tramo('FNS012', 1.0) is None
