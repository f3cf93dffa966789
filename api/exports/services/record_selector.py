# api/exports/services/record_selector.py
"""
Selector de registros para la exportación FONASA.

Aplica los filtros opcionales (rango de fechas de ingreso, centro y estado de
validación) sobre una colección de registros de episodios, conservando el
orden de entrada. No accede a la base de datos ni al request.
"""
import logging

from ..constants import CAMPO_CENTRO, CAMPO_FECHA_INGRESO, CAMPO_VALIDADO
from ..utils import parse_fecha, resolver_campo

logger = logging.getLogger(__name__)


class ExportFilter:
    """
    Filtros ya normalizados de una exportación. Cualquier atributo en None
    significa "sin restricción".
    """

    def __init__(self, desde=None, hasta=None, centro=None, validado=None):
        self.desde = desde
        self.hasta = hasta
        self.centro = centro
        self.validado = validado

    @classmethod
    def from_params(cls, params):
        """
        Construye el filtro desde los parámetros crudos del request.
        Strings vacíos equivalen a ausencia; fechas ilegibles se ignoran con
        una advertencia.
        """
        return cls(
            desde=_parse_fecha_filtro(params.get('desde'), 'desde'),
            hasta=_parse_fecha_filtro(params.get('hasta'), 'hasta'),
            centro=_limpiar_texto(params.get('centro')),
            validado=_limpiar_texto(params.get('validado')),
        )

    @property
    def tiene_rango_fechas(self):
        return self.desde is not None or self.hasta is not None

    def as_dict(self):
        return {
            'desde': self.desde.isoformat() if self.desde else None,
            'hasta': self.hasta.isoformat() if self.hasta else None,
            'centro': self.centro,
            'validado': self.validado,
        }

    def __eq__(self, other):
        return isinstance(other, ExportFilter) and self.as_dict() == other.as_dict()

    def __repr__(self):
        return f'ExportFilter({self.as_dict()})'


def _limpiar_texto(valor):
    if valor is None:
        return None
    texto = str(valor).strip()
    return texto or None


def _parse_fecha_filtro(valor, nombre):
    texto = _limpiar_texto(valor)
    if texto is None:
        return None
    fecha = parse_fecha(texto)
    if fecha is None:
        logger.warning(f"Filtro '{nombre}' ignorado: fecha ilegible {texto!r}")
    return fecha


def cumple_filtro(registro, filtro):
    """True si el registro satisface todos los filtros activos."""
    if filtro.tiene_rango_fechas:
        ingreso = parse_fecha(resolver_campo(registro, *CAMPO_FECHA_INGRESO))
        # Sin fecha de ingreso no se puede ubicar en el rango
        if ingreso is None:
            return False
        if filtro.desde is not None and ingreso < filtro.desde:
            return False
        if filtro.hasta is not None and ingreso > filtro.hasta:
            return False

    if filtro.centro is not None:
        centro = resolver_campo(registro, *CAMPO_CENTRO)
        if centro is None or filtro.centro.lower() not in str(centro).lower():
            return False

    if filtro.validado is not None:
        validado = resolver_campo(registro, *CAMPO_VALIDADO)
        if validado is None or str(validado).strip().lower() != filtro.validado.lower():
            return False

    return True


def select_records(records, filtro=None):
    """
    Retorna la lista de registros que cumplen el filtro, en el orden original.
    """
    if filtro is None:
        return list(records)
    return [registro for registro in records if cumple_filtro(registro, filtro)]
