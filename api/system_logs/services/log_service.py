# api/system_logs/services/log_service.py
"""
Registro de eventos en la bitácora del sistema (tabla LogSistema).

Un fallo al escribir la bitácora nunca debe romper la petición que lo origina:
el error se registra en el logger de la aplicación y se continúa.
"""
import logging

from django.db import DatabaseError
from django.utils import timezone

from ..models import LogSistema

logger = logging.getLogger(__name__)


class LogService:

    @staticmethod
    def registrar(action, usuario=None, endpoint='', level=LogSistema.Nivel.INFO,
                  message=None, metadata=None):
        """Crea una entrada en la bitácora. Retorna None si no se pudo guardar."""
        if usuario is not None and not getattr(usuario, 'is_authenticated', False):
            usuario = None

        try:
            return LogSistema.objects.create(
                usuario=usuario,
                endpoint=endpoint or '',
                action=action,
                level=level,
                message=message or action,
                metadata=metadata or {},
            )
        except DatabaseError as e:
            logger.error(f"Error creando log del sistema ({action}): {e}")
            return None

    @staticmethod
    def registrar_login(usuario, exitoso, ip=None, correo=None):
        correo = correo or getattr(usuario, 'correo', None) or 'N/A'
        return LogService.registrar(
            'Login exitoso' if exitoso else 'Intento de login fallido',
            usuario=usuario if exitoso else None,
            endpoint='/api/auth/login',
            level=LogSistema.Nivel.SUCCESS if exitoso else LogSistema.Nivel.ERROR,
            message=(
                f"Usuario {correo} inició sesión correctamente" if exitoso
                else f"Intento de login fallido para {correo}"
            ),
            metadata={
                'ip': ip or 'N/A',
                'email': correo,
                'timestamp': timezone.now().isoformat(),
            },
        )

    @staticmethod
    def registrar_carga_archivo(usuario, nombre_archivo, tamano, exitoso, error=None, endpoint='/api/upload'):
        mb = (tamano or 0) / 1024 / 1024
        return LogService.registrar(
            'Carga de archivo exitosa' if exitoso else 'Error al cargar archivo',
            usuario=usuario,
            endpoint=endpoint,
            level=LogSistema.Nivel.SUCCESS if exitoso else LogSistema.Nivel.ERROR,
            message=(
                f"Archivo {nombre_archivo} cargado correctamente ({mb:.2f} MB)" if exitoso
                else f"Error al cargar archivo {nombre_archivo}: {error}"
            ),
            metadata={
                'fileName': nombre_archivo,
                'fileSize': tamano,
                'success': exitoso,
                'error': error,
                'timestamp': timezone.now().isoformat(),
            },
        )

    @staticmethod
    def registrar_descarga_archivo(usuario, nombre_archivo, tipo, tamano, metadata=None):
        return LogService.registrar(
            'Descarga de archivo',
            usuario=usuario,
            endpoint='/api/export',
            level=LogSistema.Nivel.INFO,
            message=f"Archivo {nombre_archivo} ({tipo}) descargado",
            metadata={
                **(metadata or {}),
                'fileName': nombre_archivo,
                'fileType': tipo,
                'fileSize': tamano,
                'timestamp': timezone.now().isoformat(),
            },
        )

    @staticmethod
    def registrar_accion_admin(usuario, action, detalle=None, metadata=None):
        return LogService.registrar(
            action,
            usuario=usuario,
            endpoint='/api/admin',
            level=LogSistema.Nivel.INFO,
            message=detalle or action,
            metadata={
                **(metadata or {}),
                'timestamp': timezone.now().isoformat(),
            },
        )
