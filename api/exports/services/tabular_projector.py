# api/exports/services/tabular_projector.py
"""
Proyector tabular de la exportación FONASA.

Convierte los registros ya filtrados, más el bloque de procedencia, en un
documento de dos hojas:

- "Metadata": un par clave/valor por campo de procedencia.
- "FONASA": las mismas líneas de procedencia como "# campo:", una fila en
  blanco, el encabezado de 29 columnas y una fila por registro.

El documento se arma en memoria y luego se escribe como xlsx con openpyxl.
"""
import json
import logging
from io import BytesIO

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from ..constants import (
    CAMPO_FECHA_ALTA,
    CAMPO_FECHA_INGRESO,
    CAMPO_INLIER_OUTLIER,
    CAMPOS_PROCEDENCIA,
    COLUMNAS_FONASA,
    ENCABEZADOS_FONASA,
    ESTADA,
    FECHA,
    HOJA_FONASA,
    HOJA_METADATA,
    MONTO,
    NORMA,
    NUMERO,
)
from ..exceptions import SerializationError
from ..utils import a_numero, formatear_fecha, parse_fecha, resolver_campo

logger = logging.getLogger(__name__)


class TabularDocument:
    """Hojas en el orden en que se agregan al libro."""

    def __init__(self):
        self.hojas = []

    def agregar_hoja(self, nombre, filas):
        self.hojas.append((nombre, filas))

    def hoja(self, nombre):
        for nombre_hoja, filas in self.hojas:
            if nombre_hoja == nombre:
                return filas
        raise KeyError(nombre)

    @property
    def nombres_hojas(self):
        return [nombre for nombre, _ in self.hojas]


# ============================================================================
# SERIALIZACIÓN DE VALORES
# ============================================================================

def a_json_compacto(valor):
    try:
        return json.dumps(valor, separators=(',', ':'), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Valor no serializable: {e}") from e


def valor_procedencia(valor):
    """Texto de un campo de procedencia; los objetos van como JSON compacto."""
    if valor is None:
        return ''
    if isinstance(valor, str):
        return valor
    if isinstance(valor, (dict, list, tuple, bool, int, float)):
        return a_json_compacto(valor)
    try:
        return str(valor)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Valor de procedencia no serializable: {e}") from e


def filas_procedencia(provenance):
    return [(campo, valor_procedencia(provenance.get(campo))) for campo in CAMPOS_PROCEDENCIA]


# ============================================================================
# RESOLUCIÓN DE COLUMNAS
# ============================================================================

def _dias_estada(registro, explicito):
    numero = a_numero(explicito)
    if numero is not None:
        return numero

    ingreso = parse_fecha(resolver_campo(registro, *CAMPO_FECHA_INGRESO))
    alta = parse_fecha(resolver_campo(registro, *CAMPO_FECHA_ALTA))
    if ingreso is None or alta is None:
        return ''
    dias = (alta - ingreso).days
    return dias if dias >= 0 else ''


def _grupo_en_norma(registro, explicito):
    if explicito is not None:
        return _texto(explicito)

    clasificacion = resolver_campo(registro, *CAMPO_INLIER_OUTLIER)
    if clasificacion is None:
        return ''
    clasificacion = str(clasificacion).strip().lower()
    if clasificacion.startswith('inlier'):
        return 'S'
    if 'outlier' in clasificacion:
        return 'N'
    return ''


def _texto(valor):
    if isinstance(valor, (dict, list)):
        return a_json_compacto(valor)
    if isinstance(valor, (str, int, float, bool)):
        return valor
    return str(valor)


def resolver_columna(registro, columna):
    valor = resolver_campo(registro, columna.campo, columna.alternativos)

    if columna.tipo == FECHA:
        return formatear_fecha(valor)

    if columna.tipo in (MONTO, NUMERO):
        numero = a_numero(valor)
        return columna.defecto if numero is None else numero

    if columna.tipo == ESTADA:
        return _dias_estada(registro, valor)

    if columna.tipo == NORMA:
        return _grupo_en_norma(registro, valor)

    if valor is None:
        return columna.defecto
    return _texto(valor)


def fila_fonasa(registro):
    return [resolver_columna(registro, columna) for columna in COLUMNAS_FONASA]


# ============================================================================
# PROYECCIÓN
# ============================================================================

def project(records, provenance):
    """
    Arma el TabularDocument. Mismos registros y procedencia producen
    exactamente las mismas filas.
    """
    procedencia = filas_procedencia(provenance)

    filas_fonasa = [[f'# {campo}:', valor] for campo, valor in procedencia]
    filas_fonasa.append([])
    filas_fonasa.append(list(ENCABEZADOS_FONASA))
    filas_fonasa.extend(fila_fonasa(registro) for registro in records)

    documento = TabularDocument()
    documento.agregar_hoja(HOJA_METADATA, [[campo, valor] for campo, valor in procedencia])
    documento.agregar_hoja(HOJA_FONASA, filas_fonasa)
    return documento


def escribir_xlsx(documento):
    """Serializa el documento a bytes xlsx."""
    libro = Workbook()
    libro.remove(libro.active)

    try:
        for nombre, filas in documento.hojas:
            hoja = libro.create_sheet(title=nombre)
            for fila in filas:
                hoja.append(fila)

        buffer = BytesIO()
        libro.save(buffer)
    except (IllegalCharacterError, TypeError, ValueError) as e:
        logger.error(f"No se pudo escribir el xlsx: {e}")
        raise SerializationError(f"No se pudo escribir el documento: {e}") from e

    return buffer.getvalue()
