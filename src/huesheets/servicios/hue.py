# huesheets/servicios/hue.py
import logging

import requests

from ..config import Settings
from .errores import GatewayError

logger = logging.getLogger(__name__)


def fetch_sensors(settings: Settings, session=None) -> dict:
    """GET único a /api/<usuario>/sensors. Devuelve el mapa índice -> sensor."""
    http = session or requests
    url = settings.hue_url
    logger.info("Consultando gateway Hue en %s", settings.HUE_IP)

    resp = http.get(url, timeout=settings.HUE_TIMEOUT)
    resp.raise_for_status()
    data = resp.json()

    # Hue responde 200 con [{"error": {...}}] ante usuario inválido
    if isinstance(data, list):
        errors = [item.get("error", {}).get("description", item) for item in data if isinstance(item, dict)]
        raise GatewayError(f"El gateway devolvió error: {errors or data}")
    if not isinstance(data, dict):
        raise GatewayError(f"Respuesta inesperada del gateway: {type(data).__name__}")

    logger.info("Sensores recibidos: %d", len(data))
    return data
