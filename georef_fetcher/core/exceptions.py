"""Errores de los trabajos de descarga. Todos son locales a un dataset."""
from typing import Optional


class GeorefError(Exception):
    """Error base de la descarga de un dataset."""

    def __init__(self, message: str, dataset: Optional[str] = None):
        super().__init__(message)
        self.dataset = dataset


class NetworkError(GeorefError):
    """Fallo de conexión, timeout o respuesta HTTP no exitosa."""


class ParseError(GeorefError):
    """La respuesta no es JSON válido."""


class SchemaError(GeorefError):
    """Falta el arreglo esperado en el documento o no es una lista."""


class StorageError(GeorefError):
    """No se pudo crear o escribir un archivo de salida."""
