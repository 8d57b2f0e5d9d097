"""
Configuración para la descarga de datasets de la API Georef
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


# Columnas compartidas por municipios y departamentos: (encabezado, ruta, tipo)
_COLUMNAS_BASICAS = [
    ("id", "id", "text"),
    ("Nombre", "nombre", "text"),
    ("Provincia", "provincia.nombre", "text"),
    ("Lat", "centroide.lat", "number"),
    ("Lon", "centroide.lon", "number"),
]


class Settings:
    """Configuración centralizada para la descarga"""
    BASE_URL = os.getenv("GEOREF_BASE_URL", "https://apis.datos.gob.ar/georef/api")
    MAX_RESULTS = int(os.getenv("GEOREF_MAX_RESULTS", "5000"))

    # Ruta relativa al directorio de trabajo, igual que el script original
    DATA_DIR = os.getenv("GEOREF_DATA_DIR", "data")

    # None = sin timeout en la petición HTTP
    REQUEST_TIMEOUT = _optional_float(os.getenv("GEOREF_TIMEOUT"))

    LOG_LEVEL = os.getenv("GEOREF_LOG_LEVEL", "INFO")
    LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

    # Tabla declarativa de datasets. El orden define el orden de lanzamiento.
    DATASETS = {
        "municipios": {
            "label": "Municipios",
            "array_key": "municipios",
            "columns": _COLUMNAS_BASICAS,
        },
        "departamentos": {
            "label": "Departamentos",
            "array_key": "departamentos",
            "columns": _COLUMNAS_BASICAS,
        },
        "localidades": {
            "label": "Localidades",
            "array_key": "localidades",
            "columns": [
                ("id", "id", "text"),
                ("Nombre", "nombre", "text"),
                ("Categoria", "categoria", "text"),
                ("Departamento", "departamento.nombre", "text"),
                ("Municipio", "municipio.nombre", "text"),
                ("Provincia", "provincia.nombre", "text"),
                ("Lat", "centroide.lat", "number"),
                ("Lon", "centroide.lon", "number"),
            ],
        },
    }

    @classmethod
    def dataset_url(cls, name: str, max_results: Optional[int] = None) -> str:
        """Devuelve la URL del endpoint de un dataset, ej: .../municipios?max=5000"""
        if name not in cls.DATASETS:
            raise ValueError(f"Dataset desconocido: {name}")
        limit = cls.MAX_RESULTS if max_results is None else max_results
        return f"{cls.BASE_URL.rstrip('/')}/{name}?max={limit}"

    @classmethod
    def raw_path(cls, name: str, data_dir: Optional[str] = None) -> str:
        return os.path.join(data_dir or cls.DATA_DIR, f"{name}.json")

    @classmethod
    def csv_path(cls, name: str, data_dir: Optional[str] = None) -> str:
        return os.path.join(data_dir or cls.DATA_DIR, f"{name}.csv")
