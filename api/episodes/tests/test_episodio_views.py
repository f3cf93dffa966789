# api/episodes/tests/test_episodio_views.py
"""
Tests de la API de episodios: listado, detalle, alta y edición por rol.
"""
import datetime

import pytest
from django.urls import reverse
from rest_framework import status

from api.agreement_prices.models import PrecioConvenio
from api.episodes.factories import EpisodioFactory, GrdFactory, PacienteFactory
from api.episodes.models import Episodio
from api.episodes.services.episodio_service import EpisodioService
from api.system_logs.models import LogSistema
from api.technology_adjustments.models import AjusteTecnologia


def _detail_url(valor):
    return reverse('episodes:episodio-detail', kwargs={'pk': valor})


@pytest.mark.django_db
class TestEpisodioListado:

    def setup_method(self):
        self.url = reverse('episodes:episodio-list')

    def test_sin_autenticacion(self, api_client):
        response = api_client.get(self.url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_listado_paginado_mas_reciente_primero(self, cliente_como, codificador_user):
        primero = EpisodioFactory()
        segundo = EpisodioFactory()

        response = cliente_como(codificador_user).get(self.url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        assert [e['id'] for e in response.data['results']] == [segundo.id, primero.id]
        assert response.data['results'][0]['paciente_detalle']['rut'] == segundo.paciente.rut
        assert response.data['results'][0]['estado_validacion'] == 'Aprobado'

    def test_filtro_por_convenio(self, cliente_como, finanzas_user):
        EpisodioFactory(episodio_cmbd='A', convenio='FNS012')
        EpisodioFactory(episodio_cmbd='B', convenio='CH0041')

        response = cliente_como(finanzas_user).get(self.url, {'convenio': 'fns'})

        assert [e['episodio_cmbd'] for e in response.data['results']] == ['A']

    def test_busqueda_por_rut(self, cliente_como, gestion_user):
        paciente = PacienteFactory(rut='11111111-1')
        EpisodioFactory(episodio_cmbd='BUSCADO', paciente=paciente)
        EpisodioFactory(episodio_cmbd='OTRO')

        response = cliente_como(gestion_user).get(self.url, {'search': '11111111'})

        assert [e['episodio_cmbd'] for e in response.data['results']] == ['BUSCADO']

    def test_tamano_de_pagina(self, cliente_como, admin_user):
        for _ in range(3):
            EpisodioFactory()

        response = cliente_como(admin_user).get(self.url, {'page_size': 2})

        assert response.data['count'] == 3
        assert len(response.data['results']) == 2

    def test_meta_sin_episodios(self, cliente_como, codificador_user):
        response = cliente_como(codificador_user).get(reverse('episodes:episodio-meta'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'count': 0, 'lastImportedAt': None}

    def test_meta(self, cliente_como, codificador_user):
        EpisodioFactory()
        ultimo = EpisodioFactory()

        response = cliente_como(codificador_user).get(reverse('episodes:episodio-meta'))

        assert response.data['count'] == 2
        assert response.data['lastImportedAt'] == ultimo.created_at.isoformat()

    def test_final_con_precio_de_convenio(self, cliente_como, finanzas_user):
        PrecioConvenio.objects.create(convenio='FNS019', precio=700000)
        EpisodioFactory(episodio_cmbd='F1', convenio='FNS019', grd=GrdFactory(peso=2.0), monto_at=1000)

        response = cliente_como(finanzas_user).get(reverse('episodes:episodio-final'))

        assert response.status_code == status.HTTP_200_OK
        registro = response.data['results'][0]
        assert registro['episodio'] == 'F1'
        assert registro['precio_base_tramo'] == 700000
        assert registro['valor_grd'] == 1400000
        assert registro['monto_final'] == 1401000


@pytest.mark.django_db
class TestEpisodioDetalle:

    def test_por_episodio_cmbd(self, cliente_como, codificador_user):
        episodio = EpisodioFactory(episodio_cmbd='CMBD-77')

        response = cliente_como(codificador_user).get(_detail_url('CMBD-77'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == episodio.id
        assert response.data['grd_detalle']['codigo'] == episodio.grd.codigo

    def test_por_id_interno(self, cliente_como, codificador_user):
        episodio = EpisodioFactory(episodio_cmbd='SIN-NUMERO')

        response = cliente_como(codificador_user).get(_detail_url(episodio.id))

        assert response.data['episodio_cmbd'] == 'SIN-NUMERO'

    def test_cmbd_gana_al_id(self, cliente_como, codificador_user):
        por_id = EpisodioFactory(episodio_cmbd='X')
        por_cmbd = EpisodioFactory(episodio_cmbd=str(por_id.id))

        response = cliente_como(codificador_user).get(_detail_url(por_id.id))

        assert response.data['id'] == por_cmbd.id

    def test_inexistente(self, cliente_como, codificador_user):
        response = cliente_como(codificador_user).get(_detail_url('no-existe'))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestEpisodioAltaYReemplazo:

    def setup_method(self):
        self.url = reverse('episodes:episodio-list')

    def test_admin_crea(self, cliente_como, admin_user):
        grd = GrdFactory()
        response = cliente_como(admin_user).post(self.url, {
            'centro': 'Hospital Clínico UC',
            'episodio_cmbd': 'NUEVO-1',
            'fecha_ingreso': '2024-05-01',
            'fecha_alta': '2024-05-04',
            'convenio': 'FNS012',
            'grd': grd.id,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Episodio.objects.get(episodio_cmbd='NUEVO-1').grd == grd

    def test_alta_anterior_al_ingreso(self, cliente_como, admin_user):
        response = cliente_como(admin_user).post(self.url, {
            'fecha_ingreso': '2024-05-04',
            'fecha_alta': '2024-05-01',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'fecha_alta' in response.data['errors']

    @pytest.mark.parametrize('rol_fixture', ['codificador_user', 'finanzas_user', 'gestion_user'])
    def test_otros_roles_no_crean(self, request, cliente_como, rol_fixture):
        usuario = request.getfixturevalue(rol_fixture)

        response = cliente_como(usuario).post(self.url, {'centro': 'X'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_put_solo_admin(self, cliente_como, gestion_user, admin_user):
        episodio = EpisodioFactory()
        datos = {'centro': 'Clínica Nueva', 'episodio_cmbd': episodio.episodio_cmbd}

        response = cliente_como(gestion_user).put(_detail_url(episodio.id), datos, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = cliente_como(admin_user).put(_detail_url(episodio.id), datos, format='json')
        assert response.status_code == status.HTTP_200_OK
        episodio.refresh_from_db()
        assert episodio.centro == 'Clínica Nueva'


@pytest.mark.django_db
class TestEpisodioEdicionPorRol:

    def test_gestion_valida(self, cliente_como, gestion_user):
        episodio = EpisodioFactory(validado=None)

        response = cliente_como(gestion_user).patch(
            _detail_url(episodio.id), {'validado': False}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['estado_validacion'] == 'Rechazado'
        episodio.refresh_from_db()
        assert episodio.validado is False
        log = LogSistema.objects.get(action='Validación de episodio')
        assert log.usuario == gestion_user
        assert log.metadata['validado'] is False

    def test_finanzas_no_valida(self, cliente_como, finanzas_user):
        episodio = EpisodioFactory(validado=None)

        response = cliente_como(finanzas_user).patch(
            _detail_url(episodio.id), {'validado': True}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        episodio.refresh_from_db()
        assert episodio.validado is None

    def test_finanzas_edita_campos_financieros(self, cliente_como, finanzas_user):
        episodio = EpisodioFactory()

        response = cliente_como(finanzas_user).patch(_detail_url(episodio.id), {
            'estado_rn': 'Aprobado',
            'monto_rn': 120000,
            'precio_base_tramo': 950000,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        episodio.refresh_from_db()
        assert episodio.estado_rn == 'Aprobado'
        assert episodio.monto_rn == 120000
        assert episodio.precio_base_tramo == 950000

    def test_finanzas_no_edita_at(self, cliente_como, finanzas_user):
        episodio = EpisodioFactory()

        response = cliente_como(finanzas_user).patch(
            _detail_url(episodio.id), {'at_detalle': 'Marcapaso'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_estado_rn_invalido(self, cliente_como, finanzas_user):
        episodio = EpisodioFactory()

        response = cliente_como(finanzas_user).patch(
            _detail_url(episodio.id), {'estado_rn': 'Listo'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'estado_rn' in response.data['errors']

    def test_monto_negativo(self, cliente_como, finanzas_user):
        episodio = EpisodioFactory()

        response = cliente_como(finanzas_user).patch(
            _detail_url(episodio.id), {'pago_outlier_superior': -1}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_codificador_at_detalle_autocompleta_monto(self, cliente_como, codificador_user):
        AjusteTecnologia.objects.create(at='Marcapaso', monto=1500000)
        episodio = EpisodioFactory(at_sn=None, monto_at=None)

        response = cliente_como(codificador_user).patch(
            _detail_url(episodio.id), {'at_sn': 'S', 'at_detalle': ' Marcapaso '}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        episodio.refresh_from_db()
        assert episodio.at_sn is True
        assert episodio.at_detalle == 'Marcapaso'
        assert episodio.monto_at == 1500000

    def test_at_detalle_inexistente(self, cliente_como, codificador_user):
        episodio = EpisodioFactory()

        response = cliente_como(codificador_user).patch(
            _detail_url(episodio.id), {'at_detalle': 'No registrado'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'at_detalle' in response.data['errors']

    def test_at_no_limpia_detalle_y_monto(self, cliente_como, gestion_user):
        episodio = EpisodioFactory(at_sn=True, at_detalle='Stent', monto_at=300000)

        response = cliente_como(gestion_user).patch(
            _detail_url(episodio.id), {'at_sn': 'N', 'at_detalle': 'Stent'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        episodio.refresh_from_db()
        assert episodio.at_sn is False
        assert episodio.at_detalle == ''
        assert episodio.monto_at == 0

    def test_codificador_no_edita_monto_at_directo(self, cliente_como, codificador_user):
        episodio = EpisodioFactory(monto_at=0)

        response = cliente_como(codificador_user).patch(
            _detail_url(episodio.id), {'monto_at': 999}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        episodio.refresh_from_db()
        assert episodio.monto_at == 0

    def test_fecha_ingreso_sin_tocar_no_rompe_validacion(self, cliente_como, gestion_user):
        episodio = EpisodioFactory(
            fecha_ingreso=datetime.date(2024, 1, 1), fecha_alta=datetime.date(2024, 1, 3)
        )

        response = cliente_como(gestion_user).patch(
            _detail_url(episodio.id), {'validado': True}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK


class TestCamposPorRol:

    @pytest.mark.parametrize('rol,campos,esperado', [
        ('admin', ['validado', 'monto_at'], []),
        ('gestion', ['validado', 'precio_base_tramo'], []),
        ('gestion', ['validado', 'monto_rn'], ['monto_rn']),
        ('codificador', ['documentacion', 'valor_grd'], []),
        ('finanzas', ['documentacion', 'estado_rn'], ['documentacion']),
        ('desconocido', ['centro'], ['centro']),
    ])
    def test_campos_no_permitidos(self, rol, campos, esperado):
        assert EpisodioService.campos_no_permitidos(rol, campos) == esperado
