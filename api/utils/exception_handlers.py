# api/utils/exception_handlers.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .renderers import MENSAJES_POR_ESTADO

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Convierte toda excepción de una vista DRF al sobre estándar de la API.

    Las excepciones que DRF no reconoce se registran con traceback y se
    responden como 500 sin exponer detalles internos.
    """
    response = exception_handler(exc, context)
    vista = context.get('view').__class__.__name__ if context.get('view') else '-'

    if response is None:
        logger.critical(
            f"Excepción no controlada en {vista}: {exc.__class__.__name__} - {exc}",
            exc_info=True
        )
        return Response(
            {
                'success': False,
                'status_code': status.HTTP_500_INTERNAL_SERVER_ERROR,
                'message': MENSAJES_POR_ESTADO[500],
                'data': None,
                'errors': {'detail': ['Ha ocurrido un error inesperado']},
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    # 4xx esperados (validación, permisos) no son errores del servidor
    nivel = logging.ERROR if response.status_code >= 500 else logging.WARNING
    logger.log(nivel, f"API {response.status_code} en {vista}: {exc.__class__.__name__} - {exc}")

    response.data = {
        'success': False,
        'status_code': response.status_code,
        'message': _mensaje_error(exc, response.status_code),
        'data': None,
        'errors': _formatear_errores(response.data),
    }
    return response


def _mensaje_error(exc, status_code):
    """Primer mensaje del detalle de la excepción, o el genérico del estado"""
    detalle = getattr(exc, 'detail', None)
    if isinstance(detalle, dict) and detalle:
        primero = next(iter(detalle.values()))
        return str(primero[0]) if isinstance(primero, list) and primero else str(primero)
    if isinstance(detalle, list) and detalle:
        return str(detalle[0])
    if detalle is not None:
        return str(detalle)
    return MENSAJES_POR_ESTADO.get(status_code, 'Error en la solicitud')


def _formatear_errores(data):
    if isinstance(data, dict):
        errores = {}
        for campo, mensajes in data.items():
            if isinstance(mensajes, list):
                errores[campo] = [str(m) for m in mensajes]
            elif isinstance(mensajes, dict):
                errores[campo] = _formatear_errores(mensajes)
            else:
                errores[campo] = [str(mensajes)]
        return errores
    if isinstance(data, list):
        return {'non_field_errors': [str(m) for m in data]}
    return {'detail': [str(data)]}
