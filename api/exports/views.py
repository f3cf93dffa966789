# api/exports/views.py
"""
Endpoints de exportación FONASA/GRD.
"""
import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import TienePermisoPorRol
from api.system_logs.services.log_service import LogService
from .constants import XLSX_CONTENT_TYPE
from .exceptions import ExportError
from .services.export_service import ExportService

logger = logging.getLogger(__name__)

PARAMETROS_EXPORTACION = ('desde', 'hasta', 'centro', 'validado', 'type')


class ExportView(APIView):
    """
    GET /api/export/?desde=YYYY-MM-DD&hasta=YYYY-MM-DD&centro=...&validado=SÍ&type=FONASA

    Retorna el xlsx como adjunto. Roles: finanzas, gestion y admin.
    """
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'export'

    def get(self, request):
        params = {
            nombre: request.query_params.get(nombre)
            for nombre in PARAMETROS_EXPORTACION
        }
        request_id = request.headers.get('X-Request-ID', '')
        usuario = {
            'id': str(request.user.pk),
            'name': request.user.nombre,
            'email': request.user.correo,
        }

        try:
            resultado = ExportService().exportar(usuario, params, request_id=request_id)
        except ExportError as e:
            logger.error(f"Exportación fallida para {request.user.correo}: {e}")
            return Response(
                {'error': 'export_failed', 'message': str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        LogService.registrar_descarga_archivo(
            request.user,
            resultado.filename,
            'xlsx',
            len(resultado.contenido),
            {
                'filters': resultado.provenance['filters'],
                'grdType': resultado.provenance['grdType'],
                'requestId': request_id,
                'totalEpisodios': resultado.total_registros,
            }
        )

        response = HttpResponse(resultado.contenido, content_type=XLSX_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename="{resultado.filename}"'
        response['Content-Length'] = str(len(resultado.contenido))
        return response


class ExportInfoView(APIView):
    """GET /api/export/info/ - descripción pública del endpoint de exportación"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({
            'endpoint': '/api/export/',
            'method': 'GET',
            'description': 'Exporta episodios en formato Excel FONASA (hojas Metadata y FONASA)',
            'authentication': 'Requiere autenticación (roles finanzas, gestion o admin)',
            'parameters': {
                'desde': {'type': 'string', 'format': 'YYYY-MM-DD', 'description': 'Fecha de ingreso mínima (inclusive)'},
                'hasta': {'type': 'string', 'format': 'YYYY-MM-DD', 'description': 'Fecha de ingreso máxima (inclusive)'},
                'centro': {'type': 'string', 'description': 'Texto contenido en el nombre del centro (sin distinguir mayúsculas)'},
                'validado': {'type': 'string', 'format': 'SÍ | NO', 'description': 'Estado de validación exacto'},
                'type': {'type': 'string', 'default': 'FONASA', 'description': 'Tipo de GRD informado en la procedencia'},
            },
            'headers': {
                'X-Request-ID': 'Identificador opcional del request, se copia a la procedencia',
            },
            'response': {
                'content_type': XLSX_CONTENT_TYPE,
                'filename': 'FONASA_export_YYYYMMDDTHHMMSS.xlsx',
            },
        })
