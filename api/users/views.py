# users/views.py

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .models import Usuario
from .serializers import (
    UsuarioSerializer,
    UsuarioCreateSerializer,
    UsuarioUpdateSerializer
)
from api.permissions import TienePermisoPorRol
from api.system_logs.services.log_service import LogService
import logging

logger = logging.getLogger(__name__)


class UsuarioPagination(PageNumberPagination):
    """Configuración de paginación para usuarios"""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class UsuarioViewSet(viewsets.ModelViewSet):
    """
    ViewSet para gestión de usuarios (solo administradores).
    - 200 OK: GET / PATCH exitoso
    - 201 CREATED: POST exitoso
    - 204 NO CONTENT: DELETE exitoso (desactiva, no borra)
    - 400 BAD REQUEST: Datos inválidos
    - 403 FORBIDDEN: Sin permisos
    - 404 NOT FOUND: Recurso no encontrado
    """
    queryset = Usuario.objects.all()
    serializer_class = UsuarioSerializer
    permission_classes = [TienePermisoPorRol]
    permission_model_name = 'usuario'
    pagination_class = UsuarioPagination
    filterset_fields = ['rol', 'is_active']

    def get_queryset(self):
        return Usuario.objects.all().order_by('-fecha_creacion')

    def get_serializer_class(self):
        """Retorna el serializer apropiado según la acción"""
        if self.action == 'create':
            return UsuarioCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return UsuarioUpdateSerializer
        return UsuarioSerializer

    def perform_create(self, serializer):
        usuario = serializer.save()
        LogService.registrar_accion_admin(
            self.request.user,
            'Usuario creado',
            f"Se creó el usuario {usuario.correo} con rol {usuario.rol}",
            {'usuario_id': str(usuario.id)}
        )

    def perform_update(self, serializer):
        usuario = serializer.save()
        LogService.registrar_accion_admin(
            self.request.user,
            'Usuario actualizado',
            f"Se actualizó el usuario {usuario.correo}",
            {'usuario_id': str(usuario.id), 'campos': sorted(serializer.validated_data.keys())}
        )

    def perform_destroy(self, instance):
        """
        Soft delete: desactiva el usuario en lugar de borrarlo.
        DRF automáticamente retorna 204 NO CONTENT.
        """
        instance.is_active = False
        instance.save()
        logger.info(f"Usuario {instance.correo} desactivado por {self.request.user.correo}")
        LogService.registrar_accion_admin(
            self.request.user,
            'Usuario desactivado',
            f"Se desactivó el usuario {instance.correo}",
            {'usuario_id': str(instance.id)}
        )

    @action(detail=True, methods=['patch'], url_path='status')
    def toggle_status(self, request, pk=None):
        """
        PATCH /api/users/usuarios/{id}/status/
        Activa o desactiva un usuario. Sin body, invierte el estado actual.
        """
        usuario = self.get_object()

        if usuario.pk == request.user.pk:
            return Response(
                {'detail': 'No puede cambiar el estado de su propia cuenta'},
                status=status.HTTP_400_BAD_REQUEST
            )

        nuevo_estado = request.data.get('is_active')
        if nuevo_estado is None:
            usuario.is_active = not usuario.is_active
        else:
            usuario.is_active = str(nuevo_estado).lower() in ('true', '1')
        usuario.save(update_fields=['is_active', 'fecha_modificacion'])

        accion = 'Usuario activado' if usuario.is_active else 'Usuario desactivado'
        logger.info(f"{accion}: {usuario.correo} por {request.user.correo}")
        LogService.registrar_accion_admin(
            request.user,
            accion,
            f"{accion}: {usuario.correo}",
            {'usuario_id': str(usuario.id), 'is_active': usuario.is_active}
        )

        return Response(UsuarioSerializer(usuario).data, status=status.HTTP_200_OK)
