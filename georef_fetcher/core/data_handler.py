"""Escritura de archivos de salida y lectura del documento descargado."""
import json
import math
from typing import Any, Dict, List, Optional

import pandas as pd

from .exceptions import ParseError, SchemaError, StorageError


def persist_raw(body: str, path: str, dataset: Optional[str] = None) -> None:
    """Guarda la respuesta tal cual llegó, sobrescribiendo el archivo."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(body)
    except OSError as e:
        raise StorageError(f"No se pudo escribir {path}: {e}", dataset) from e


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Constante no permitida en JSON: {name}")


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Número fuera de rango: {text}")
    return value


def parse(body: str, dataset: Optional[str] = None) -> Any:
    """JSON estricto: rechaza NaN, Infinity y números que no caben en un float."""
    try:
        return json.loads(body, parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError as e:
        raise ParseError(f"Respuesta JSON inválida: {e}", dataset) from e


def extract_array(document: Any, key: str, dataset: Optional[str] = None) -> List[Any]:
    """Devuelve la lista bajo la clave `key` del documento. Sin valor por defecto."""
    if not isinstance(document, dict):
        raise SchemaError(
            f"Se esperaba un objeto JSON, se recibió {type(document).__name__}", dataset
        )
    if key not in document:
        raise SchemaError(f"Falta la clave '{key}' en la respuesta", dataset)
    elements = document[key]
    if not isinstance(elements, list):
        raise SchemaError(
            f"La clave '{key}' no es una lista ({type(elements).__name__})", dataset
        )
    return elements


def write_table(
    header: List[str],
    rows: List[Dict[str, str]],
    path: str,
    dataset: Optional[str] = None
) -> None:
    """Escribe encabezado + filas en CSV, respetando el orden recibido."""
    df = pd.DataFrame(rows, columns=header)
    try:
        df.to_csv(path, index=False, encoding="utf-8", lineterminator="\n")
    except OSError as e:
        raise StorageError(f"No se pudo escribir {path}: {e}", dataset) from e
