"""Aplanado de los elementos JSON de Georef a filas de la tabla."""
from typing import Any, Dict, List, Tuple

from ..utils.helpers import format_number

Column = Tuple[str, str, str]

# Valor por defecto según el tipo de columna
DEFAULTS = {
    "text": "",
    "number": 0.0,
}

_MISSING = object()


def get_path(value: Any, path: str, default: Any = None) -> Any:
    """
    Recorre una ruta con puntos ('centroide.lat') dentro de un valor JSON.
    Si algún segmento no existe o el valor intermedio no es un objeto,
    devuelve `default`.
    """
    current = value
    for segment in path.split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(segment, _MISSING)
        if current is _MISSING:
            return default
    return current


def _coerce(raw: Any, kind: str) -> Any:
    if kind == "number":
        # bool es subclase de int, pero no es un número válido aquí
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            try:
                return float(raw)
            except OverflowError:
                return DEFAULTS["number"]
        return DEFAULTS["number"]
    if isinstance(raw, str):
        return raw
    return DEFAULTS["text"]


def map_row(element: Any, columns: List[Column]) -> List[Any]:
    """Convierte un elemento en una fila con el orden de `columns`."""
    return [_coerce(get_path(element, path), kind) for _, path, kind in columns]


def render_row(record: List[Any], columns: List[Column]) -> List[str]:
    """Pasa una fila a texto; los números con su forma decimal corta."""
    return [
        format_number(value) if kind == "number" else value
        for value, (_, _, kind) in zip(record, columns)
    ]


def map_rows(elements: List[Any], columns: List[Column]) -> List[Dict[str, str]]:
    """Filas listas para escribir, en el mismo orden de `elements`."""
    header = [name for name, _, _ in columns]
    return [
        dict(zip(header, render_row(map_row(element, columns), columns)))
        for element in elements
    ]
