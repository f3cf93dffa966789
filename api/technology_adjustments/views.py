# api/technology_adjustments/views.py
import logging

from rest_framework import status, viewsets
from rest_framework.response import Response

from api.permissions import TienePermisoPorRol
from .models import AjusteTecnologia
from .serializers import AjusteTecnologiaSerializer

logger = logging.getLogger(__name__)


class AjusteTecnologiaViewSet(viewsets.ModelViewSet):
    """
    GET    /api/ajustes-tecnologia/       - todos los roles (solo AT no vacíos)
    POST   /api/ajustes-tecnologia/       - finanzas, gestion, admin
    PATCH  /api/ajustes-tecnologia/{id}/  - finanzas, gestion, admin
    DELETE /api/ajustes-tecnologia/{id}/  - finanzas, gestion, admin
    """
    queryset = AjusteTecnologia.objects.all()
    serializer_class = AjusteTecnologiaSerializer
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'ajustetecnologia'

    def get_queryset(self):
        queryset = AjusteTecnologia.objects.all()
        if self.action == 'list':
            # El dropdown de episodios no muestra entradas sin AT
            queryset = queryset.exclude(at__regex=r'^\s*$')
        return queryset.order_by('at')

    def perform_create(self, serializer):
        ajuste = serializer.save()
        logger.info(f"Ajuste por tecnología creado: {ajuste.id} ({ajuste.at}) por {self.request.user.correo}")

    def perform_update(self, serializer):
        ajuste = serializer.save()
        logger.info(f"Ajuste por tecnología actualizado: {ajuste.id} por {self.request.user.correo}")

    def destroy(self, request, *args, **kwargs):
        ajuste = self.get_object()
        ajuste_id = str(ajuste.id)
        ajuste.delete()
        logger.info(f"Ajuste por tecnología eliminado: {ajuste_id} por {request.user.correo}")
        return Response(
            {'message': 'Ajuste por tecnología eliminado correctamente', 'id': ajuste_id},
            status=status.HTTP_200_OK
        )
