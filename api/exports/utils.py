# api/exports/utils.py
"""
Helpers puros compartidos por el selector y el proyector de la exportación.
"""
import math
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal, InvalidOperation

from django.utils.dateparse import parse_date, parse_datetime


def resolver_campo(registro, campo, alternativos=()):
    """
    Retorna el primer valor presente entre `campo` y sus `alternativos`.
    None o una llave inexistente cuentan como ausentes; '' sí es un valor.
    """
    for llave in (campo, *alternativos):
        if llave is None:
            continue
        valor = registro.get(llave)
        if valor is not None:
            return valor
    return None


def parse_fecha(valor):
    """
    Convierte un valor a fecha de calendario o None si no se puede.

    Acepta date, datetime (los aware se llevan a UTC antes de truncar) y
    strings ISO (YYYY-MM-DD o fecha-hora).
    """
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, datetime):
        if valor.tzinfo is not None and valor.utcoffset() is not None:
            valor = valor.astimezone(dt_timezone.utc)
        return valor.date()
    if isinstance(valor, date):
        return valor
    if not isinstance(valor, str):
        return None

    texto = valor.strip()
    if not texto:
        return None
    try:
        momento = parse_datetime(texto)
        if momento is not None:
            return parse_fecha(momento)
        return parse_date(texto)
    except ValueError:
        # Bien formada pero imposible (ej: 2024-02-30)
        return None


def formatear_fecha(valor):
    fecha = parse_fecha(valor)
    return fecha.isoformat() if fecha else ''


def a_numero(valor):
    """
    Convierte a int (si es entero) o float. Retorna None si no es numérico.
    Los booleanos no se consideran numéricos.
    """
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, str):
        texto = valor.strip()
        if not texto:
            return None
        try:
            valor = Decimal(texto)
        except InvalidOperation:
            return None
    if isinstance(valor, (int, float, Decimal)):
        try:
            numero = float(valor)
        except (OverflowError, ValueError):
            return None
        if math.isnan(numero) or math.isinf(numero):
            return None
        if isinstance(valor, int):
            return valor
        return int(numero) if numero.is_integer() else numero
    return None
