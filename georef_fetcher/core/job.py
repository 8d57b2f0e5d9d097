"""
Trabajo de descarga y transformación de un dataset de Georef.
"""
import logging
from typing import Any, Dict, Optional

from ..config.settings import Settings
from ..utils.helpers import current_thread_label
from . import data_handler
from .exceptions import GeorefError
from .fetcher import fetch
from .row_mapper import map_rows

logger = logging.getLogger(__name__)

PENDING = "pending"
FETCHING = "fetching"
PERSISTED = "persisted"
PARSED = "parsed"
WRITTEN = "written"
FAILED = "failed"


class FetchTransformJob:
    """Descarga un dataset, guarda el JSON crudo y genera el CSV."""

    def __init__(
        self,
        name: str,
        data_dir: Optional[str] = None,
        max_results: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        if name not in Settings.DATASETS:
            raise ValueError(f"Dataset desconocido: {name}")
        self.name = name
        self.config = Settings.DATASETS[name]
        self.url = Settings.dataset_url(name, max_results)
        self.raw_path = Settings.raw_path(name, data_dir)
        self.csv_path = Settings.csv_path(name, data_dir)
        self.timeout = Settings.REQUEST_TIMEOUT if timeout is None else timeout
        self.status = PENDING

    @property
    def header(self):
        return [column for column, _, _ in self.config["columns"]]

    def get_default_result(self) -> Dict[str, Any]:
        return {
            "dataset": self.name,
            "status": self.status,
            "rows": 0,
            "raw_path": self.raw_path,
            "csv_path": self.csv_path,
            "error": None,
        }

    def execute(self) -> int:
        """
        Ejecuta los pasos en orden y devuelve la cantidad de filas escritas.
        El JSON crudo se guarda antes de parsear, así queda en disco aunque
        falle algún paso posterior.
        """
        self.status = FETCHING
        body = fetch(self.url, timeout=self.timeout, dataset=self.name)

        data_handler.persist_raw(body, self.raw_path, self.name)
        self.status = PERSISTED

        document = data_handler.parse(body, self.name)
        elements = data_handler.extract_array(document, self.config["array_key"], self.name)
        self.status = PARSED

        rows = map_rows(elements, self.config["columns"])
        data_handler.write_table(self.header, rows, self.csv_path, self.name)
        self.status = WRITTEN
        return len(rows)

    def run(self) -> Dict[str, Any]:
        """
        Igual que `execute`, pero los errores de la descarga quedan en el
        resultado. Cualquier otro error se relanza con el estado en `failed`.
        """
        logger.info(f"Descargando {self.name}... Hilo: {current_thread_label()}")
        try:
            rows = self.execute()
        except GeorefError as e:
            self.status = FAILED
            logger.error(f"Error en {self.name} ({type(e).__name__}): {e}")
            return {**self.get_default_result(), "error": str(e)}
        except Exception:
            self.status = FAILED
            raise

        logger.info(f"Descarga de {self.config['label'].lower()} completa ({rows} filas)")
        return {**self.get_default_result(), "rows": rows}
