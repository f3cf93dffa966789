# common/services/storage_backend.py
"""
Implementación del patrón Strategy para backends de almacenamiento de respaldos.
Permite cambiar entre MinIO (desarrollo), AWS S3 (producción) y disco local
(pruebas) sin modificar código.
"""
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional
import logging
import os

logger = logging.getLogger(__name__)


class StorageUploadError(Exception):
    """El almacenamiento rechazó la subida. No se reintenta."""


class StorageBackend(ABC):
    """Interfaz abstracta para backends de almacenamiento"""

    bucket: str = ''

    @abstractmethod
    def upload_file(self, object_key: str, fileobj: BinaryIO, content_type: str) -> str:
        """Sube el contenido y retorna la llave almacenada. Lanza StorageUploadError."""

    @abstractmethod
    def generate_view_url(self, object_key: str, expiration: int = 3600, download_name: Optional[str] = None) -> Optional[str]:
        """Genera URL para ver/descargar archivo (GET)"""

    @abstractmethod
    def check_file_exists(self, object_key: str) -> bool:
        """Verifica que el archivo existe en el storage"""

    @abstractmethod
    def delete_file(self, object_key: str) -> bool:
        """Elimina un archivo del storage"""


class S3CompatibleBackend(StorageBackend):
    """Operaciones comunes de AWS S3 y MinIO (misma API vía boto3)"""

    nombre = 'S3'

    def __init__(self, config: dict, endpoint_url: Optional[str] = None):
        import boto3
        from botocore.config import Config

        self.s3_client = boto3.client(
            's3',
            endpoint_url=endpoint_url,
            aws_access_key_id=config['access_key'],
            aws_secret_access_key=config['secret_key'],
            region_name=config.get('region', 'us-east-1'),
            config=Config(signature_version='s3v4')
        )
        self.bucket = config['bucket_name']

    def upload_file(self, object_key: str, fileobj: BinaryIO, content_type: str) -> str:
        from botocore.exceptions import BotoCoreError, ClientError
        try:
            self.s3_client.upload_fileobj(
                fileobj,
                self.bucket,
                object_key,
                ExtraArgs={'ContentType': content_type or 'application/octet-stream'}
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error subiendo archivo a {self.nombre}: {object_key} - {e}")
            raise StorageUploadError(str(e)) from e

        logger.info(f"Archivo subido a {self.nombre}: {object_key}")
        return object_key

    def generate_view_url(self, object_key: str, expiration: int = 3600, download_name: Optional[str] = None) -> Optional[str]:
        from botocore.exceptions import BotoCoreError, ClientError
        params = {'Bucket': self.bucket, 'Key': object_key}

        if download_name:
            params['ResponseContentDisposition'] = f'attachment; filename="{download_name}"'

        try:
            return self.s3_client.generate_presigned_url(
                'get_object',
                Params=params,
                ExpiresIn=expiration
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error generando URL de descarga {self.nombre}: {e}")
            return None

    def check_file_exists(self, object_key: str) -> bool:
        from botocore.exceptions import ClientError
        try:
            self.s3_client.head_object(Bucket=self.bucket, Key=object_key)
            return True
        except ClientError:
            return False

    def delete_file(self, object_key: str) -> bool:
        from botocore.exceptions import BotoCoreError, ClientError
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=object_key)
            logger.info(f"Archivo eliminado de {self.nombre}: {object_key}")
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error eliminando archivo {self.nombre}: {e}")
            return False


class S3Backend(S3CompatibleBackend):
    """Backend para AWS S3 (Producción)"""

    nombre = 'S3'

    def __init__(self, config: dict):
        super().__init__(config)
        logger.info(f"AWS S3 Backend inicializado: {self.bucket}")


class MinIOBackend(S3CompatibleBackend):
    """Backend para MinIO (Desarrollo Local)"""

    nombre = 'MinIO'

    def __init__(self, config: dict):
        super().__init__({**config, 'region': 'us-east-1'}, endpoint_url=config['endpoint_url'])
        self.endpoint_url = config['endpoint_url']

        # Auto-crear bucket si no existe
        self._ensure_bucket_exists()
        logger.info(f"MinIO Backend inicializado: {self.endpoint_url}/{self.bucket}")

    def _ensure_bucket_exists(self):
        """Crea el bucket automáticamente en desarrollo"""
        from botocore.exceptions import BotoCoreError, ClientError
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
            logger.debug(f"Bucket '{self.bucket}' ya existe")
        except ClientError:
            logger.warning(f"Creando bucket '{self.bucket}' en MinIO...")
            try:
                self.s3_client.create_bucket(Bucket=self.bucket)
                logger.info(f"Bucket '{self.bucket}' creado exitosamente")
            except ClientError as e:
                logger.error(f"Error creando bucket: {e}")
        except BotoCoreError as e:
            # MinIO apagado: las subidas fallarán con StorageUploadError
            logger.error(f"MinIO no disponible en {self.endpoint_url}: {e}")


class LocalBackend(StorageBackend):
    """Backend en disco (MEDIA_ROOT), para pruebas y desarrollo sin MinIO"""

    def __init__(self, config: dict):
        from django.core.files.storage import FileSystemStorage

        self.storage = FileSystemStorage(location=config['location'], base_url=config.get('base_url'))
        self.bucket = 'local'
        logger.info(f"Local Backend inicializado: {config['location']}")

    def upload_file(self, object_key: str, fileobj: BinaryIO, content_type: str) -> str:
        from django.core.files import File
        try:
            if self.storage.exists(object_key):
                self.storage.delete(object_key)
            guardado = self.storage.save(object_key, File(fileobj, name=os.path.basename(object_key)))
        except OSError as e:
            logger.error(f"Error guardando archivo local {object_key}: {e}")
            raise StorageUploadError(str(e)) from e
        return guardado

    def generate_view_url(self, object_key: str, expiration: int = 3600, download_name: Optional[str] = None) -> Optional[str]:
        return self.storage.url(object_key)

    def check_file_exists(self, object_key: str) -> bool:
        return self.storage.exists(object_key)

    def delete_file(self, object_key: str) -> bool:
        try:
            self.storage.delete(object_key)
            return True
        except OSError as e:
            logger.error(f"Error eliminando archivo local: {e}")
            return False
