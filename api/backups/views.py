# api/backups/views.py
"""
Respaldos de episodios: subida (multipart) y listado.
"""
import logging
import os
import time

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.utils.text import get_valid_filename
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from api.episodes.repositories.episodio_repository import EpisodioRepository
from api.permissions import TienePermisoPorRol
from api.system_logs.services.log_service import LogService
from common.services.storage_backend import StorageUploadError
from common.services.storage_service import StorageService
from .models import Respaldo
from .serializers import RespaldoSerializer

logger = logging.getLogger(__name__)


def construir_storage_key(episodio_id, nombre_original, marca=None):
    """
    grd_respaldos/{episodio}/ep{episodio}_{marca}_{nombre}.{extension}
    """
    marca = marca if marca is not None else int(time.time() * 1000)
    base = os.path.basename(nombre_original)
    stem, _, resto = base.partition('.')
    extension = base.rsplit('.', 1)[-1].lower() if resto else 'bin'
    try:
        stem = get_valid_filename(stem)
    except SuspiciousFileOperation:
        # Nombre sin caracteres utilizables (ej: '.env' o '@@.pdf')
        stem = 'archivo'
    return f"grd_respaldos/{episodio_id}/ep{episodio_id}_{marca}_{stem}.{extension}"


class RespaldoUploadView(APIView):
    """
    POST /api/episodios/{id}/respaldo/
    Body multipart: file
    """
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'respaldo'
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, episodio_id):
        archivo = request.FILES.get('file')
        if archivo is None:
            return Response(
                {'error': 'No se subió ningún archivo'},
                status=status.HTTP_400_BAD_REQUEST
            )

        max_bytes = settings.RESPALDO_MAX_BYTES
        if archivo.size > max_bytes:
            return Response(
                {'error': f'El archivo supera el máximo permitido ({max_bytes // (1024 * 1024)} MB)'},
                status=status.HTTP_400_BAD_REQUEST
            )

        episodio = EpisodioRepository.get_by_id(episodio_id)
        if episodio is None:
            return Response(
                {'error': 'Episodio no encontrado'},
                status=status.HTTP_404_NOT_FOUND
            )

        storage_key = construir_storage_key(episodio.pk, archivo.name)
        storage = StorageService()

        try:
            storage_key = storage.upload_file(storage_key, archivo, archivo.content_type)
        except StorageUploadError as e:
            LogService.registrar_carga_archivo(
                request.user, archivo.name, archivo.size, False, error=str(e),
                endpoint=request.path
            )
            return Response(
                {'error': 'Error interno al subir el archivo', 'details': str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        respaldo = Respaldo.objects.create(
            filename=archivo.name,
            file_type=archivo.content_type or '',
            size_bytes=archivo.size,
            storage_key=storage_key,
            bucket=storage.bucket,
            episodio=episodio,
            uploaded_by=request.user,
        )

        logger.info(f"Respaldo {respaldo.id} subido para episodio {episodio.pk}: {storage_key}")
        LogService.registrar_carga_archivo(
            request.user, archivo.name, archivo.size, True, endpoint=request.path
        )

        return Response(
            RespaldoSerializer(respaldo, context={'storage': storage}).data,
            status=status.HTTP_201_CREATED
        )


class RespaldoListView(APIView):
    """
    GET /api/episodios/{id}/respaldos/
    Respaldos del episodio, del más reciente al más antiguo.
    """
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'respaldo'

    def get(self, request, episodio_id):
        episodio = EpisodioRepository.get_by_id(episodio_id)
        if episodio is None:
            return Response(
                {'error': 'Episodio no encontrado'},
                status=status.HTTP_404_NOT_FOUND
            )

        respaldos = (
            Respaldo.objects
            .filter(episodio=episodio)
            .select_related('uploaded_by')
            .order_by('-uploaded_at', '-id')
        )
        serializer = RespaldoSerializer(respaldos, many=True, context={'storage': StorageService()})
        return Response(serializer.data)
