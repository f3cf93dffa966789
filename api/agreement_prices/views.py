# api/agreement_prices/views.py
import logging

from rest_framework import status, viewsets
from rest_framework.response import Response

from api.permissions import TienePermisoPorRol
from .models import PrecioConvenio
from .serializers import PrecioConvenioSerializer

logger = logging.getLogger(__name__)


class PrecioConvenioViewSet(viewsets.ModelViewSet):
    """
    GET    /api/precios-convenios/       - finanzas, gestion, admin (más recientes primero)
    POST   /api/precios-convenios/
    PATCH  /api/precios-convenios/{id}/
    DELETE /api/precios-convenios/{id}/
    """
    queryset = PrecioConvenio.objects.all()
    serializer_class = PrecioConvenioSerializer
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'precioconvenio'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return PrecioConvenio.objects.order_by('-fecha_creacion')

    def perform_create(self, serializer):
        precio = serializer.save()
        logger.info(
            f"Precio de convenio creado: {precio.convenio} {precio.tramo or ''} = {precio.precio} "
            f"por {self.request.user.correo}"
        )

    def perform_update(self, serializer):
        precio = serializer.save()
        logger.info(f"Precio de convenio actualizado: {precio.id} por {self.request.user.correo}")

    def destroy(self, request, *args, **kwargs):
        precio = self.get_object()
        precio_id = str(precio.id)
        precio.delete()
        logger.info(f"Precio de convenio eliminado: {precio_id} por {request.user.correo}")
        return Response(
            {'message': 'Precio de convenio eliminado correctamente', 'id': precio_id},
            status=status.HTTP_200_OK
        )
