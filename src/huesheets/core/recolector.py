# huesheets/core/recolector.py
from __future__ import annotations

import logging
from typing import Optional

from google.oauth2.credentials import Credentials

from ..config import Settings
from ..servicios.hue import fetch_sensors
from ..servicios.sheets import append_rows
from .lecturas import build_rows

logger = logging.getLogger(__name__)


def collect(creds: Credentials, settings: Settings, *, session=None, sheets_client=None) -> Optional[dict]:
    """Lee el gateway una vez y agrega las lecturas filtradas al Sheet.

    Los errores del gateway se propagan. Un append fallido se loguea y devuelve None.
    """
    sensors = fetch_sensors(settings, session=session)
    rows = build_rows(sensors, settings.SENSOR_TYPE)
    if not rows:
        logger.warning("Ningún sensor de tipo %s en la respuesta. Se envía el append vacío.", settings.SENSOR_TYPE)

    return append_rows(
        creds,
        settings.GOOGLE_SHEET_ID,
        settings.GOOGLE_SHEET_RANGE,
        rows,
        client=sheets_client,
    )
