# common/tests/test_storage_backend.py
"""
Tests de los backends de almacenamiento de respaldos.
S3/MinIO se prueban con el cliente boto3 simulado.
"""
from io import BytesIO
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from common.services.storage_backend import LocalBackend, MinIOBackend, S3Backend, StorageUploadError
from common.services.storage_service import StorageService

CONFIG_S3 = {
    'bucket_name': 'grd-respaldos',
    'access_key': 'key',
    'secret_key': 'secret',
}


def _client_error(operacion):
    return ClientError({'Error': {'Code': '500', 'Message': 'falla'}}, operacion)


class TestLocalBackend:

    def test_subir_verificar_y_eliminar(self, tmp_path):
        backend = LocalBackend({'location': str(tmp_path), 'base_url': '/media/'})

        key = backend.upload_file('grd_respaldos/1/ep1_1_a.pdf', BytesIO(b'contenido'), 'application/pdf')

        assert key == 'grd_respaldos/1/ep1_1_a.pdf'
        assert (tmp_path / 'grd_respaldos' / '1' / 'ep1_1_a.pdf').read_bytes() == b'contenido'
        assert backend.check_file_exists(key)
        assert backend.generate_view_url(key) == '/media/grd_respaldos/1/ep1_1_a.pdf'

        assert backend.delete_file(key)
        assert not backend.check_file_exists(key)

    def test_sobrescribe_misma_llave(self, tmp_path):
        backend = LocalBackend({'location': str(tmp_path)})

        backend.upload_file('x/a.txt', BytesIO(b'uno'), 'text/plain')
        key = backend.upload_file('x/a.txt', BytesIO(b'dos'), 'text/plain')

        assert key == 'x/a.txt'
        assert (tmp_path / 'x' / 'a.txt').read_bytes() == b'dos'


class TestS3Backend:

    def test_subida(self):
        with patch('boto3.client') as mock_client:
            backend = S3Backend(CONFIG_S3)
            key = backend.upload_file('grd_respaldos/1/a.pdf', BytesIO(b'x'), 'application/pdf')

        assert key == 'grd_respaldos/1/a.pdf'
        mock_client.return_value.upload_fileobj.assert_called_once()
        _, kwargs = mock_client.return_value.upload_fileobj.call_args
        assert kwargs['ExtraArgs'] == {'ContentType': 'application/pdf'}

    def test_subida_rechazada(self):
        with patch('boto3.client') as mock_client:
            mock_client.return_value.upload_fileobj.side_effect = _client_error('PutObject')
            backend = S3Backend(CONFIG_S3)

            with pytest.raises(StorageUploadError):
                backend.upload_file('k', BytesIO(b'x'), '')

    def test_url_de_descarga_con_nombre(self):
        with patch('boto3.client') as mock_client:
            mock_client.return_value.generate_presigned_url.return_value = 'https://firmada'
            backend = S3Backend(CONFIG_S3)

            url = backend.generate_view_url('k', download_name='informe.pdf')

        assert url == 'https://firmada'
        _, kwargs = mock_client.return_value.generate_presigned_url.call_args
        assert kwargs['Params']['ResponseContentDisposition'] == 'attachment; filename="informe.pdf"'

    def test_archivo_inexistente(self):
        with patch('boto3.client') as mock_client:
            mock_client.return_value.head_object.side_effect = _client_error('HeadObject')
            backend = S3Backend(CONFIG_S3)

            assert backend.check_file_exists('k') is False


class TestMinIOBackend:

    def test_crea_bucket_si_no_existe(self):
        with patch('boto3.client') as mock_client:
            mock_client.return_value.head_bucket.side_effect = _client_error('HeadBucket')
            MinIOBackend({**CONFIG_S3, 'endpoint_url': 'http://localhost:9000'})

        mock_client.return_value.create_bucket.assert_called_once_with(Bucket='grd-respaldos')

    def test_minio_apagado_no_impide_iniciar(self):
        with patch('boto3.client') as mock_client:
            mock_client.return_value.head_bucket.side_effect = EndpointConnectionError(
                endpoint_url='http://localhost:9000'
            )
            backend = MinIOBackend({**CONFIG_S3, 'endpoint_url': 'http://localhost:9000'})

        assert backend.bucket == 'grd-respaldos'


class TestStorageService:

    def test_singleton(self):
        assert StorageService() is StorageService()

    def test_backend_local_segun_settings(self, settings, tmp_path):
        settings.STORAGE_BACKEND = 'local'
        settings.MEDIA_ROOT = str(tmp_path)
        StorageService.reset()

        servicio = StorageService()

        assert isinstance(servicio._backend, LocalBackend)
        assert servicio.bucket == 'local'

    def test_backend_s3_segun_settings(self, settings):
        settings.STORAGE_BACKEND = 's3'
        settings.AWS_S3_REGION_NAME = 'sa-east-1'
        StorageService.reset()

        with patch('boto3.client') as mock_client:
            servicio = StorageService()

        assert isinstance(servicio._backend, S3Backend)
        assert mock_client.call_args.kwargs['region_name'] == 'sa-east-1'
