# api/episodes/repositories/episodio_repository.py
import json
import logging

from django.db import DatabaseError
from django.db.models import F

from api.agreement_prices.services.precio_convenio_service import PrecioConvenioService
from api.exports.exceptions import RecordRetrievalError
from ..models import Episodio

logger = logging.getLogger(__name__)


class EpisodioRepository:
    """
    Fuente de registros para la exportación FONASA.

    fetch_records(filtro) entrega cada episodio como un diccionario con las
    llaves que entiende el proyector tabular.
    """

    @staticmethod
    def get_by_id(episodio_id):
        return Episodio.objects.filter(pk=episodio_id).first()

    @staticmethod
    def queryset_para_filtro(filtro=None):
        """
        Solo el rango de fechas se acota en SQL. centro y validado los decide
        select_records: LIKE en SQLite no ignora mayúsculas fuera de ASCII.
        """
        queryset = Episodio.objects.select_related('paciente', 'grd')

        if filtro is not None:
            if filtro.desde is not None:
                queryset = queryset.filter(fecha_ingreso__gte=filtro.desde)
            if filtro.hasta is not None:
                queryset = queryset.filter(fecha_ingreso__lte=filtro.hasta)

        return queryset.order_by(F('fecha_ingreso').asc(nulls_last=True), 'id')

    @classmethod
    def fetch_records(cls, filtro=None):
        try:
            precios = PrecioConvenioService.tabla_vigente()
            return [a_registro(episodio, precios) for episodio in cls.queryset_para_filtro(filtro)]
        except DatabaseError as e:
            logger.error(f"Error consultando episodios para exportación: {e}")
            raise RecordRetrievalError(f"No se pudieron obtener los episodios: {e}") from e


# ============================================================================
# MAPEO EPISODIO -> REGISTRO
# ============================================================================

def _si_no(valor, si='S', no='N'):
    if valor is None:
        return ''
    return si if valor else no


def _dias_estada(episodio):
    if episodio.dias_estada is not None:
        return episodio.dias_estada
    if episodio.fecha_ingreso and episodio.fecha_alta:
        dias = (episodio.fecha_alta - episodio.fecha_ingreso).days
        return dias if dias >= 0 else None
    return None


def clasificar_estada(episodio):
    """Inlier / Outlier según los puntos de corte del GRD."""
    if episodio.inlier_outlier:
        return episodio.inlier_outlier

    grd = episodio.grd
    dias = _dias_estada(episodio)
    if grd is None or not grd.tiene_norma or dias is None:
        return None

    if dias > grd.punto_corte_sup:
        return 'Outlier Superior'
    if dias < grd.punto_corte_inf:
        return 'Outlier Inferior'
    return 'Inlier'


def calcular_valor_grd(episodio, peso, precio_base):
    if episodio.valor_grd is not None:
        return episodio.valor_grd
    if peso is None or precio_base is None:
        return None
    return peso * precio_base


def calcular_monto_final(episodio, valor_grd):
    if episodio.monto_final is not None:
        return episodio.monto_final
    if valor_grd is None:
        return None
    return (
        valor_grd
        + (episodio.monto_at or 0)
        + (episodio.pago_demora_rescate or 0)
        + (episodio.pago_outlier_superior or 0)
    )


def precio_base_episodio(episodio, peso, precios=None):
    """Guardado en el episodio, luego tabla del convenio, luego precio del GRD."""
    if episodio.precio_base_tramo is not None:
        return episodio.precio_base_tramo
    if precios is not None:
        precio = precios.precio_base(episodio.convenio, peso)
        if precio is not None:
            return precio
    grd = episodio.grd
    return grd.precio_base_tramo if grd is not None else None


def a_registro(episodio, precios=None):
    paciente = episodio.paciente
    grd = episodio.grd

    peso = grd.peso if grd else None
    precio_base = precio_base_episodio(episodio, peso, precios)
    valor_grd = calcular_valor_grd(episodio, peso, precio_base)

    documentacion = episodio.documentacion
    if documentacion in (None, '', [], {}):
        doc_necesaria = None
    elif isinstance(documentacion, str):
        doc_necesaria = documentacion
    else:
        doc_necesaria = json.dumps(documentacion, separators=(',', ':'), ensure_ascii=False)

    return {
        'id': episodio.pk,
        'VALIDADO': _si_no(episodio.validado, si='SÍ', no='NO'),
        'centro': episodio.centro,
        'folio': episodio.numero_folio or None,
        'id_derivacion': episodio.id_derivacion or None,
        'episodio': episodio.episodio_cmbd or None,
        'rut': paciente.rut if paciente else None,
        'paciente_id': paciente.pk if paciente else None,
        'nombre': paciente.nombre if paciente else None,
        'tipo_episodio': episodio.tipo_episodio,
        'convenio': episodio.convenio,
        'fecha_ingreso': episodio.fecha_ingreso,
        'fecha_alta': episodio.fecha_alta,
        'servicio_alta': episodio.servicio_alta,
        'estado_rn': episodio.estado_rn,
        'at_sn': _si_no(episodio.at_sn),
        'at_detalle': episodio.at_detalle,
        'monto_at': episodio.monto_at,
        'tipo_alta': episodio.tipo_alta,
        'ir_grd': grd.codigo if grd else None,
        'peso': peso,
        'monto_rn': episodio.monto_rn,
        'demora_rescate_dias': episodio.dias_demora_rescate,
        'pago_demora_rescate': episodio.pago_demora_rescate,
        'pago_outlier_sup': episodio.pago_outlier_superior,
        'doc_necesaria': doc_necesaria,
        'inlier_outlier': clasificar_estada(episodio),
        'grupo_norma_sn': None if episodio.grupo_en_norma is None else _si_no(episodio.grupo_en_norma),
        'dias_estancia': episodio.dias_estada,
        'precio_base_tramo': precio_base,
        'valor_grd': valor_grd,
        'monto_final': calcular_monto_final(episodio, valor_grd),
    }
