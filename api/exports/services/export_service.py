# api/exports/services/export_service.py
"""
Orquesta una exportación FONASA: filtro -> repositorio -> selector ->
proyector -> xlsx, más la línea de auditoría.
"""
import json
import logging

from django.conf import settings
from django.utils import timezone

from api.episodes.repositories.episodio_repository import EpisodioRepository
from ..constants import FORMATO_MARCA_TIEMPO, FORMATO_NOMBRE_ARCHIVO, GRD_TYPE_DEFAULT
from .record_selector import ExportFilter, select_records
from .tabular_projector import escribir_xlsx, project

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('api.exports.audit')


class ExportResult:
    def __init__(self, contenido, filename, total_registros, provenance):
        self.contenido = contenido
        self.filename = filename
        self.total_registros = total_registros
        self.provenance = provenance


class ExportService:

    def __init__(self, repository=None):
        self.repository = repository or EpisodioRepository()

    def exportar(self, usuario, params, request_id=''):
        """
        Genera el xlsx para `usuario` ({'id', 'name', 'email'}).

        Raises:
            RecordRetrievalError: el repositorio falló.
            SerializationError: la procedencia o el libro no se pudo escribir.
        """
        filtro = ExportFilter.from_params(params)
        grd_type = (params.get('type') or '').strip() or getattr(
            settings, 'EXPORT_GRD_TYPE_DEFAULT', GRD_TYPE_DEFAULT
        )
        generado = timezone.now()

        registros = self.repository.fetch_records(filtro)
        seleccion = select_records(registros, filtro)

        provenance = construir_procedencia(usuario, generado, grd_type, filtro, request_id)
        documento = project(seleccion, provenance)
        contenido = escribir_xlsx(documento)

        filename = FORMATO_NOMBRE_ARCHIVO.format(marca=generado.strftime(FORMATO_MARCA_TIEMPO))

        logger.info(
            f"Exportación {grd_type} generada por {usuario.get('email')}: "
            f"{len(seleccion)} registros ({filename})"
        )
        registrar_auditoria(usuario, generado, request_id, filtro, grd_type, filename)

        return ExportResult(contenido, filename, len(seleccion), provenance)


def construir_procedencia(usuario, generado, grd_type, filtro, request_id=''):
    return {
        'generatedBy': {
            'id': usuario.get('id'),
            'name': usuario.get('name'),
            'email': usuario.get('email'),
        },
        'generatedAt': generado.isoformat(),
        'grdType': grd_type,
        'filters': filtro.as_dict(),
        'requestId': request_id or '',
        'systemVersion': getattr(settings, 'SYSTEM_VERSION', 'dev'),
    }


def registrar_auditoria(usuario, generado, request_id, filtro, grd_type, filename):
    """Una línea JSON por exportación. Un fallo aquí no detiene la descarga."""
    try:
        linea = json.dumps({
            'ts': generado.isoformat(),
            'user': usuario.get('email'),
            'requestId': request_id or '',
            'filters': filtro.as_dict(),
            'grdType': grd_type,
            'filename': filename,
        }, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error(f"No se pudo registrar la auditoría de exportación: {e}")
        return
    audit_logger.info(linea)
