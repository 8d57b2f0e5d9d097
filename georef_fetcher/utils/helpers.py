"""
Funciones auxiliares para la descarga
"""
import logging
import os
import sys
import threading
from decimal import Decimal

from ..config.settings import Settings


def setup_logging(level: str = None) -> None:
    """Configura el logging de la aplicación (una sola vez, en el punto de entrada)."""
    logging.basicConfig(
        level=getattr(logging, (level or Settings.LOG_LEVEL).upper(), logging.INFO),
        format=Settings.LOG_FORMAT,
        stream=sys.stdout,
    )


def current_thread_label() -> str:
    """Nombre e id del hilo actual, ej: 'ThreadPoolExecutor-0_1 (140213)'."""
    thread = threading.current_thread()
    return f"{thread.name} ({thread.ident})"


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def format_number(value: float) -> str:
    """
    Representación decimal más corta del número, sin notación exponencial.
    Los valores enteros se escriben sin parte decimal: 0.0 -> '0',
    -38.71 -> '-38.71', 1e-05 -> '0.00001'.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
