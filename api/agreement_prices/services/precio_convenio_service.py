# api/agreement_prices/services/precio_convenio_service.py
"""
Precio base por tramo según convenio y peso GRD.
"""
import logging
import math

from ..models import PrecioConvenio

logger = logging.getLogger(__name__)

CONVENIOS_CON_TRAMOS = ('FNS012', 'FNS026')
CONVENIOS_PRECIO_UNICO = ('FNS019', 'CH0041')


def normalizar_convenio(convenio):
    if not isinstance(convenio, str):
        return ''
    return convenio.strip().upper()


def calcular_tramo(peso):
    """T1: 0 a 1,5 · T2: hasta 2,5 · T3: sobre 2,5. None si no hay peso válido."""
    if peso is None or peso < 0:
        return None
    if peso <= 1.5:
        return 'T1'
    if peso <= 2.5:
        return 'T2'
    return 'T3'


class TablaPrecios:
    """
    Precios vigentes cargados en memoria. Ante varios registros para la
    misma llave gana el primero recibido (el más reciente).
    """

    def __init__(self, precios):
        self._por_tramo = {}
        self._unico = {}
        for precio in precios:
            if precio.precio is None or not math.isfinite(precio.precio):
                logger.warning(f"Precio inválido ignorado: {precio.convenio} {precio.tramo} ({precio.precio})")
                continue
            convenio = normalizar_convenio(precio.convenio)
            self._unico.setdefault(convenio, precio.precio)
            if precio.tramo:
                self._por_tramo.setdefault((convenio, precio.tramo), precio.precio)

    def precio_base(self, convenio, peso):
        convenio = normalizar_convenio(convenio)
        if not convenio:
            return None

        if convenio in CONVENIOS_CON_TRAMOS:
            tramo = calcular_tramo(peso)
            if tramo is None:
                logger.debug(f"Sin tramo para convenio {convenio} con peso {peso}")
                return None
            return self._por_tramo.get((convenio, tramo))

        if convenio in CONVENIOS_PRECIO_UNICO:
            return self._unico.get(convenio)

        logger.debug(f"Convenio sin tabla de precios: {convenio}")
        return None


class PrecioConvenioService:

    @staticmethod
    def tabla_vigente():
        return TablaPrecios(PrecioConvenio.objects.order_by('-fecha_creacion'))

    @classmethod
    def obtener_precio_base_tramo(cls, convenio, peso):
        return cls.tabla_vigente().precio_base(convenio, peso)
