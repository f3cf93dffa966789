# api/utils/renderers.py
from rest_framework.renderers import JSONRenderer

MENSAJES_POR_ESTADO = {
    200: 'Operación exitosa',
    201: 'Recurso creado exitosamente',
    204: 'Recurso eliminado exitosamente',
    400: 'Error en los datos enviados',
    401: 'No autenticado',
    403: 'No tiene permisos para esta acción',
    404: 'Recurso no encontrado',
    409: 'El recurso ya existe',
    429: 'Demasiadas solicitudes',
    500: 'Error interno del servidor',
}


class StandardizedJSONRenderer(JSONRenderer):
    """
    Envuelve las respuestas JSON de la API en el sobre
    {success, status_code, message, data, errors}.

    Un 'message' dentro del dict de la vista reemplaza el mensaje por defecto
    y no se repite en data/errors. response.data no se modifica.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None

        # Browsable API o render fuera de una vista
        if response is None:
            return super().render(data, accepted_media_type, renderer_context)

        # Ya viene envuelto (custom_exception_handler)
        if isinstance(data, dict) and 'success' in data and 'status_code' in data:
            return super().render(data, accepted_media_type, renderer_context)

        es_error = response.status_code >= 400
        cuerpo = self._sin_mensaje(data)
        sobre = {
            'success': not es_error,
            'status_code': response.status_code,
            'message': self._mensaje(data, response.status_code),
            'data': None if es_error else cuerpo,
            'errors': cuerpo if es_error else None,
        }
        return super().render(sobre, accepted_media_type, renderer_context)

    @staticmethod
    def _mensaje(data, status_code):
        if isinstance(data, dict) and 'message' in data:
            return data.get('message')
        return MENSAJES_POR_ESTADO.get(status_code, 'Operación completada')

    @staticmethod
    def _sin_mensaje(data):
        if isinstance(data, dict) and 'message' in data:
            return {clave: valor for clave, valor in data.items() if clave != 'message'}
        return data
