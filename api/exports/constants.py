# api/exports/constants.py
"""
Formato de la planilla FONASA/GRD.

COLUMNAS_FONASA es la única fuente del orden de columnas, los encabezados
literales y las cadenas de respaldo de cada campo. Los encabezados deben
conservarse tal cual (incluidos los espacios finales y el doble espacio de
'MONTO  RN'), porque la planilla la lee el sistema de FONASA.
"""
from collections import namedtuple

# Tipos de columna
TEXTO = 'texto'
FECHA = 'fecha'
MONTO = 'monto'          # numérico, 0 si falta o no es numérico
NUMERO = 'numero'        # numérico, '' si falta o no es numérico
ESTADA = 'estada'        # días de estada, derivable de las fechas
NORMA = 'norma'          # S/N, derivable de inlier/outlier

Columna = namedtuple('Columna', ['encabezado', 'campo', 'alternativos', 'defecto', 'tipo'])

COLUMNAS_FONASA = (
    Columna('Unnamed: 0', None, (), '', TEXTO),
    Columna('VALIDADO', 'VALIDADO', ('validado',), '', TEXTO),
    Columna('Centro', 'centro', ('hospital_desc',), '', TEXTO),
    Columna('N° Folio', 'folio', ('id_derivacion',), '', TEXTO),
    Columna('Episodio', 'episodio', ('episodio_cmbd',), '', TEXTO),
    Columna('Rut Paciente', 'rut', ('paciente_id',), '', TEXTO),
    Columna('Nombre Paciente', 'nombre', (), '', TEXTO),
    Columna('TIPO EPISODIO', 'tipo_episodio', ('tipo_actividad',), '', TEXTO),
    Columna('Fecha de ingreso ', 'fecha_ingreso', (), '', FECHA),
    Columna('Fecha Alta', 'fecha_egreso', ('fecha_alta',), '', FECHA),
    Columna('Servicios de alta', 'servicio_alta', ('servicio_egreso_desc',), '', TEXTO),
    Columna('ESTADO RN', 'estado_rn', (), '', TEXTO),
    Columna('AT (S/N)', 'at_sn', (), '', TEXTO),
    Columna('AT detalle', 'at_detalle', (), '', TEXTO),
    Columna('Monto AT', 'monto_at', (), 0, MONTO),
    Columna('Tipo de Alta', 'tipo_alta', ('motivo_egreso_desc',), '', TEXTO),
    Columna('IR - GRD', 'ir_grd', ('grd',), '', TEXTO),
    Columna('PESO ', 'peso', ('PESO',), '', NUMERO),
    Columna('MONTO  RN', 'monto_rn', (), 0, MONTO),
    Columna('Dias de demora rescate desde Hospital', 'demora_rescate_dias', (), '', NUMERO),
    Columna('Pago demora rescate', 'pago_demora_rescate', (), 0, MONTO),
    Columna('Pago por outlier superior', 'pago_outlier_sup', (), 0, MONTO),
    Columna('DOCUMENTACIÓN NECESARIA', 'doc_necesaria', (), '', TEXTO),
    Columna('Inlier/outlier', 'inlier_outlier', (), '', TEXTO),
    Columna('Grupo dentro de norma S/N', 'grupo_norma_sn', (), '', NORMA),
    Columna('Dias de Estada', 'dias_estancia', (), '', ESTADA),
    Columna('Precio Base por tramo correspondiente', 'precio_base_tramo', (), 0, MONTO),
    Columna('Valor GRD', 'valor_grd', (), 0, MONTO),
    Columna('Monto Final', 'monto_final', (), 0, MONTO),
)

ENCABEZADOS_FONASA = [columna.encabezado for columna in COLUMNAS_FONASA]

# Campos usados por el selector de registros
CAMPO_FECHA_INGRESO = ('fecha_ingreso', ())
CAMPO_FECHA_ALTA = ('fecha_egreso', ('fecha_alta',))
CAMPO_CENTRO = ('centro', ('hospital_desc',))
CAMPO_VALIDADO = ('VALIDADO', ('validado',))
CAMPO_INLIER_OUTLIER = ('inlier_outlier', ())

# Procedencia: orden fijo de los campos en ambas hojas
CAMPOS_PROCEDENCIA = (
    'generatedBy',
    'generatedAt',
    'grdType',
    'filters',
    'requestId',
    'systemVersion',
)

HOJA_METADATA = 'Metadata'
HOJA_FONASA = 'FONASA'

GRD_TYPE_DEFAULT = 'FONASA'

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
FORMATO_NOMBRE_ARCHIVO = 'FONASA_export_{marca}.xlsx'
FORMATO_MARCA_TIEMPO = '%Y%m%dT%H%M%S'
