# api/exports/exceptions.py


class ExportError(Exception):
    """Error fatal durante una exportación. Nunca se entrega un archivo parcial."""


class RecordRetrievalError(ExportError):
    """El repositorio de episodios no pudo entregar los registros."""


class SerializationError(ExportError):
    """Un valor de procedencia o el documento no pudo serializarse."""
