# api/permissions.py
from rest_framework import permissions
import logging

logger = logging.getLogger(__name__)


class TienePermisoPorRol(permissions.BasePermission):
    """
    Sistema de permisos basado en roles para la administración GRD.

    Uso:
        permission_classes = [TienePermisoPorRol]
        permission_model_name = 'respaldo'   # opcional

    Los permisos se configuran por modelo y rol.
    Si un modelo no tiene configuración específica, usa PERMISOS_BASE.
    """

    TODOS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']

    # ============================================================================
    # CONFIGURACIÓN DE PERMISOS POR MODELO
    # ============================================================================
    PERMISOS = {
        # === MÓDULO: AJUSTES POR TECNOLOGÍA ===
        'ajustetecnologia': {
            'codificador': ['GET'],
            'finanzas': TODOS,
            'gestion': TODOS,
        },

        # === MÓDULO: PRECIOS POR CONVENIO ===
        'precioconvenio': {
            'finanzas': TODOS,
            'gestion': TODOS,
        },

        # === MÓDULO: EPISODIOS ===
        # Los campos que cada rol puede tocar en PATCH se revisan en EpisodioService
        'episodio': {
            'codificador': ['GET', 'PATCH'],
            'finanzas': ['GET', 'PATCH'],
            'gestion': ['GET', 'PATCH'],
        },

        # === MÓDULO: RESPALDOS DE EPISODIOS ===
        'respaldo': {
            'codificador': ['GET', 'POST'],
            'finanzas': ['GET', 'POST'],
            'gestion': ['GET', 'POST'],
        },

        # === MÓDULO: EXPORTACIÓN FONASA ===
        'export': {
            'finanzas': ['GET'],
            'gestion': ['GET'],
        },

        # === MÓDULOS SOLO ADMINISTRADOR ===
        'usuario': {},
        'logsistema': {},
    }

    # ============================================================================
    # PERMISOS POR DEFECTO (para modelos sin configuración específica)
    # ============================================================================
    PERMISOS_BASE = {
        'codificador': ['GET'],
        'finanzas': ['GET'],
        'gestion': ['GET'],
    }

    def has_permission(self, request, view):
        user = request.user

        # 1. Usuario no autenticado = sin acceso
        if not user or not user.is_authenticated:
            return False

        # 2. Administrador = acceso total
        if user.rol == 'admin':
            return True

        # 3. Obtener nombre del modelo
        model_name = self._get_model_name(view)

        # 4. Buscar permisos específicos o usar base
        permisos_modelo = self.PERMISOS.get(model_name, self.PERMISOS_BASE)

        # 5. Verificar si el método HTTP está permitido
        metodos_permitidos = permisos_modelo.get(user.rol, [])
        allowed = request.method in metodos_permitidos or (
            request.method in ('HEAD', 'OPTIONS') and 'GET' in metodos_permitidos
        )

        if not allowed:
            logger.warning(
                f"Acceso denegado: {user.correo} ({user.rol}) → {request.method} {model_name}"
            )

        return allowed

    def _get_model_name(self, view):
        """
        Extrae el nombre del modelo desde la vista.

        Intenta en orden:
        1. view.permission_model_name
        2. view.queryset.model._meta.model_name
        3. Nombre de la clase de vista (fallback)
        """
        model_name = getattr(view, 'permission_model_name', None)
        if model_name:
            return model_name

        queryset = getattr(view, 'queryset', None)
        if queryset is not None:
            return queryset.model._meta.model_name

        return self._clean_view_name(view.__class__.__name__)

    def _clean_view_name(self, view_name):
        """
        Limpia el nombre de la vista para obtener el modelo.

        Ejemplo:
            'UsuarioViewSet' -> 'usuario'
            'RespaldoAPIView' -> 'respaldo'
        """
        view_name = view_name.lower()

        # Remover sufijos comunes
        for suffix in ['viewset', 'view', 'api']:
            if view_name.endswith(suffix):
                view_name = view_name[:-len(suffix)]

        return view_name.strip('_')
