import logging
from typing import Optional

import requests

from .exceptions import NetworkError

logger = logging.getLogger(__name__)


def fetch(url: str, timeout: Optional[float] = None, dataset: Optional[str] = None) -> str:
    """Hace un GET a la URL y devuelve el cuerpo de la respuesta como texto."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise NetworkError(f"Error descargando {url}: {e}", dataset) from e

    # La API responde en UTF-8 aunque no siempre lo declare
    if response.encoding is None or response.encoding.lower() == "iso-8859-1":
        response.encoding = "utf-8"
    logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))
    return response.text
