"""
Orquestador principal para la descarga de municipios, departamentos y
localidades desde la API Georef.
"""
import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional

from .config.settings import Settings
from .core.job import FAILED, WRITTEN, FetchTransformJob
from .utils.helpers import current_thread_label, ensure_dir, setup_logging

logger = logging.getLogger(__name__)


class GeorefFetcher:
    """Lanza un trabajo por dataset en paralelo y espera a que terminen todos."""

    def __init__(
        self,
        data_dir: Optional[str] = None,
        max_results: Optional[int] = None,
        datasets: Optional[List[str]] = None
    ) -> None:
        self.settings = Settings()
        self.data_dir = data_dir or self.settings.DATA_DIR
        self.max_results = max_results
        self.datasets = list(dict.fromkeys(datasets or self.settings.DATASETS))

    def _build_jobs(self) -> List[FetchTransformJob]:
        return [
            FetchTransformJob(name, data_dir=self.data_dir, max_results=self.max_results)
            for name in self.datasets
        ]

    def run(self) -> List[Dict[str, Any]]:
        """
        Ejecuta todos los trabajos. El fallo de uno no cancela a los demás;
        solo falla todo si no se puede crear el directorio de datos.
        """
        ensure_dir(self.data_dir)
        jobs = self._build_jobs()
        results = []

        with ThreadPoolExecutor(max_workers=len(jobs) or 1) as executor:
            future_to_job = {executor.submit(job.run): job for job in jobs}
            logger.info(f"Hilo principal: {current_thread_label()}")

            for future in as_completed(future_to_job):
                job = future_to_job[future]
                try:
                    results.append(future.result())
                except Exception as exc:
                    logger.error(f"Error inesperado en {job.name}: {exc}")
                    results.append({
                        **job.get_default_result(),
                        "status": FAILED,
                        "error": str(exc)
                    })

        self._log_summary(results)
        return results

    def _log_summary(self, results: List[Dict[str, Any]]) -> None:
        ok = sum(1 for r in results if r["status"] == WRITTEN)
        logger.info(f"{ok}/{len(results)} datasets descargados en {self.data_dir}")


def main(argv: Optional[List[str]] = None) -> int:
    """Punto de entrada principal."""
    parser = argparse.ArgumentParser(
        description='Descarga municipios, departamentos y localidades de la API Georef'
    )
    parser.add_argument(
        '--data-dir', default=Settings.DATA_DIR,
        help='Directorio de salida para los JSON y CSV.'
    )
    parser.add_argument(
        '--max', type=int, default=Settings.MAX_RESULTS,
        help='Máximo de resultados por dataset.'
    )
    parser.add_argument(
        '--datasets', nargs='+', choices=list(Settings.DATASETS),
        default=list(Settings.DATASETS), help='Datasets a descargar.'
    )
    args = parser.parse_args(argv)

    setup_logging()
    try:
        fetcher = GeorefFetcher(
            data_dir=args.data_dir, max_results=args.max, datasets=args.datasets
        )
        fetcher.run()
    except KeyboardInterrupt:
        logger.warning("Proceso interrumpido por el usuario.")
    except OSError as e:
        logger.critical(f"No se pudo crear el directorio {args.data_dir}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
