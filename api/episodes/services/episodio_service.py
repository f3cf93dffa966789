# api/episodes/services/episodio_service.py
"""
Reglas de edición de episodios por rol y autocompletado del monto AT.
"""
import logging

from rest_framework.exceptions import PermissionDenied, ValidationError

from api.system_logs.services.log_service import LogService
from api.technology_adjustments.models import AjusteTecnologia
from ..models import Episodio

logger = logging.getLogger(__name__)

# Campos que cada rol puede modificar con PATCH. admin edita todo.
CAMPOS_POR_ROL = {
    'codificador': frozenset({
        'at_sn', 'at_detalle', 'documentacion',
        'dias_demora_rescate', 'pago_demora_rescate', 'monto_rn', 'pago_outlier_superior',
        'valor_grd', 'monto_final',
    }),
    'finanzas': frozenset({
        'estado_rn', 'monto_rn',
        'dias_demora_rescate', 'pago_demora_rescate', 'pago_outlier_superior',
        'precio_base_tramo', 'valor_grd', 'monto_final',
    }),
    'gestion': frozenset({
        'validado', 'at_sn', 'at_detalle', 'precio_base_tramo',
    }),
}


class EpisodioService:

    @staticmethod
    def campos_no_permitidos(rol, campos):
        if rol == 'admin':
            return []
        permitidos = CAMPOS_POR_ROL.get(rol, frozenset())
        return sorted(set(campos) - permitidos)

    @classmethod
    def verificar_campos(cls, usuario, campos):
        rechazados = cls.campos_no_permitidos(usuario.rol, campos)
        if rechazados:
            logger.warning(
                f"Edición de episodio denegada: {usuario.correo} ({usuario.rol}) → {', '.join(rechazados)}"
            )
            raise PermissionDenied(
                f"El rol {usuario.rol} no puede editar los campos: {', '.join(rechazados)}"
            )

    @staticmethod
    def aplicar_reglas_at(datos):
        """
        AT = N limpia el detalle y deja el monto en 0.
        Un detalle nuevo toma su monto de la tabla de ajustes por tecnología.
        """
        if datos.get('at_sn') is False:
            datos['at_detalle'] = ''
            datos['monto_at'] = 0
            return datos

        if 'at_detalle' in datos:
            detalle = (datos['at_detalle'] or '').strip()
            datos['at_detalle'] = detalle
            if not detalle:
                datos['monto_at'] = 0
                return datos

            ajuste = AjusteTecnologia.objects.filter(at=detalle).first()
            if ajuste is None:
                raise ValidationError(
                    {'at_detalle': [f'El valor "{detalle}" no existe en la tabla de ajustes por tecnología']}
                )
            datos['monto_at'] = ajuste.monto

        return datos

    @classmethod
    def crear(cls, datos, usuario):
        episodio = Episodio.objects.create(**cls.aplicar_reglas_at(dict(datos)))
        logger.info(f"Episodio creado: {episodio.pk} por {usuario.correo}")
        return episodio

    @classmethod
    def actualizar(cls, episodio, datos, usuario):
        datos = cls.aplicar_reglas_at(dict(datos))
        for campo, valor in datos.items():
            setattr(episodio, campo, valor)
        episodio.save()

        logger.info(f"Episodio {episodio.pk} actualizado por {usuario.correo}: {', '.join(sorted(datos))}")
        if 'validado' in datos:
            LogService.registrar(
                'Validación de episodio',
                usuario=usuario,
                endpoint=f'/api/episodios/{episodio.pk}',
                message=f"Episodio {episodio.episodio_cmbd or episodio.pk}: {episodio.estado_validacion}",
                metadata={'episodio_id': episodio.pk, 'validado': episodio.validado},
            )
        return episodio
