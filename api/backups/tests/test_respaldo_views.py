# api/backups/tests/test_respaldo_views.py
"""
Tests de subida y listado de respaldos de episodios.
El storage es el backend local (ver conftest raíz) salvo donde se simula un fallo.
"""
from unittest.mock import patch

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status

from api.backups.models import Respaldo
from api.backups.views import construir_storage_key
from api.episodes.factories import EpisodioFactory
from api.system_logs.models import LogSistema
from common.services.storage_backend import StorageUploadError
from common.services.storage_service import StorageService


def _archivo(nombre='epicrisis.pdf', contenido=b'%PDF-1.4 contenido de prueba', tipo='application/pdf'):
    return SimpleUploadedFile(nombre, contenido, content_type=tipo)


class TestConstruirStorageKey:

    def test_formato(self):
        assert construir_storage_key(7, 'informe.final.PDF', marca=123) == 'grd_respaldos/7/ep7_123_informe.pdf'

    def test_sin_extension(self):
        assert construir_storage_key(7, 'README', marca=1) == 'grd_respaldos/7/ep7_1_README.bin'

    def test_nombre_con_espacios_y_ruta(self):
        assert construir_storage_key(3, '../../tmp/mi archivo.docx', marca=5) == 'grd_respaldos/3/ep3_5_mi_archivo.docx'

    def test_nombre_sin_caracteres_validos(self):
        assert construir_storage_key(3, '.env', marca=5) == 'grd_respaldos/3/ep3_5_archivo.env'


@pytest.mark.django_db
class TestRespaldoUpload:

    def setup_method(self):
        self.episodio = EpisodioFactory()
        self.url = reverse('backups:respaldo-upload', kwargs={'episodio_id': self.episodio.pk})

    def test_subida_exitosa(self, cliente_como, codificador_user):
        response = cliente_como(codificador_user).post(self.url, {'file': _archivo()}, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        respaldo = Respaldo.objects.get()
        assert respaldo.filename == 'epicrisis.pdf'
        assert respaldo.file_type == 'application/pdf'
        assert respaldo.size_bytes == len(b'%PDF-1.4 contenido de prueba')
        assert respaldo.uploaded_by == codificador_user
        assert respaldo.bucket == 'local'
        assert respaldo.storage_key.startswith(f'grd_respaldos/{self.episodio.pk}/ep{self.episodio.pk}_')
        assert respaldo.storage_key.endswith('_epicrisis.pdf')
        assert StorageService().check_file_exists(respaldo.storage_key)

        assert response.data['usuario']['correo'] == codificador_user.correo
        assert response.data['download_url']
        assert LogSistema.objects.filter(action='Carga de archivo exitosa', usuario=codificador_user).exists()

    def test_sin_archivo(self, cliente_como, codificador_user):
        response = cliente_como(codificador_user).post(self.url, {}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'No se subió ningún archivo'
        assert not Respaldo.objects.exists()

    def test_archivo_demasiado_grande(self, cliente_como, codificador_user, settings):
        settings.RESPALDO_MAX_BYTES = 10

        response = cliente_como(codificador_user).post(
            self.url, {'file': _archivo(contenido=b'x' * 11)}, format='multipart'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Respaldo.objects.exists()

    def test_episodio_inexistente(self, cliente_como, codificador_user):
        url = reverse('backups:respaldo-upload', kwargs={'episodio_id': self.episodio.pk + 1000})

        response = cliente_como(codificador_user).post(url, {'file': _archivo()}, format='multipart')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_fallo_del_storage(self, cliente_como, codificador_user):
        with patch('api.backups.views.StorageService') as mock_storage:
            mock_storage.return_value.upload_file.side_effect = StorageUploadError('bucket no disponible')

            response = cliente_como(codificador_user).post(self.url, {'file': _archivo()}, format='multipart')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['details'] == 'bucket no disponible'
        assert not Respaldo.objects.exists()
        assert LogSistema.objects.filter(action='Error al cargar archivo').exists()

    def test_sin_autenticacion(self, api_client):
        response = api_client.post(self.url, {'file': _archivo()}, format='multipart')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestRespaldoList:

    def setup_method(self):
        self.episodio = EpisodioFactory()
        self.url = reverse('backups:respaldo-list', kwargs={'episodio_id': self.episodio.pk})

    def _respaldo(self, usuario, nombre, episodio=None):
        return Respaldo.objects.create(
            filename=nombre,
            file_type='application/pdf',
            size_bytes=100,
            storage_key=f'grd_respaldos/x/{nombre}',
            bucket='local',
            episodio=episodio or self.episodio,
            uploaded_by=usuario,
        )

    def test_mas_reciente_primero(self, cliente_como, finanzas_user):
        self._respaldo(finanzas_user, 'primero.pdf')
        self._respaldo(finanzas_user, 'segundo.pdf')
        self._respaldo(finanzas_user, 'otro_episodio.pdf', episodio=EpisodioFactory())

        response = cliente_como(finanzas_user).get(self.url)

        assert response.status_code == status.HTTP_200_OK
        assert [r['filename'] for r in response.data] == ['segundo.pdf', 'primero.pdf']
        assert response.data[0]['usuario']['nombre'] == finanzas_user.nombre

    def test_lista_vacia(self, cliente_como, gestion_user):
        response = cliente_como(gestion_user).get(self.url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_episodio_inexistente(self, cliente_como, gestion_user):
        url = reverse('backups:respaldo-list', kwargs={'episodio_id': self.episodio.pk + 1000})

        response = cliente_como(gestion_user).get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestRespaldoSignals:

    def test_borrar_respaldo_elimina_archivo(self, finanzas_user):
        respaldo = Respaldo.objects.create(
            filename='a.pdf', size_bytes=1, storage_key='grd_respaldos/1/a.pdf',
            episodio=EpisodioFactory(), uploaded_by=finanzas_user,
        )

        with patch('api.backups.signals.StorageService') as mock_storage:
            mock_storage.return_value.check_file_exists.return_value = True
            respaldo.delete()

        mock_storage.return_value.delete_file.assert_called_once_with('grd_respaldos/1/a.pdf')

    def test_archivo_ausente_no_intenta_borrar(self, finanzas_user):
        respaldo = Respaldo.objects.create(
            filename='b.pdf', size_bytes=1, storage_key='grd_respaldos/1/b.pdf',
            episodio=EpisodioFactory(), uploaded_by=finanzas_user,
        )

        with patch('api.backups.signals.StorageService') as mock_storage:
            mock_storage.return_value.check_file_exists.return_value = False
            respaldo.delete()

        mock_storage.return_value.check_file_exists.assert_called_once_with('grd_respaldos/1/b.pdf')
        mock_storage.return_value.delete_file.assert_not_called()

    def test_borrado_real_en_storage_local(self, cliente_como, codificador_user):
        episodio = EpisodioFactory()
        cliente_como(codificador_user).post(
            reverse('backups:respaldo-upload', kwargs={'episodio_id': episodio.id}),
            {'file': _archivo()},
            format='multipart',
        )
        respaldo = Respaldo.objects.get(episodio=episodio)
        assert StorageService().check_file_exists(respaldo.storage_key)

        respaldo.delete()

        assert not StorageService().check_file_exists(respaldo.storage_key)
