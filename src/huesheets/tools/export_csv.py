# huesheets/tools/export_csv.py
"""
Guarda a CSV las lecturas del gateway, sin tocar el Google Sheet.

Mismas filas que manda el append (lastupdated, uniqueid, temperatura cruda, temperatura).
Se guardan en EXPORT_DIR (default: ./out).
"""

from __future__ import annotations
import os
import sys
from datetime import datetime
import pandas as pd

from huesheets.config import Settings
from huesheets.core.lecturas import build_rows
from huesheets.servicios.hue import fetch_sensors

COLUMNS = ["lastupdated", "uniqueid", "temperature_raw", "temperature"]


def rows_to_dataframe(rows: list[list]) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=COLUMNS)
    df["temperature_raw"] = pd.to_numeric(df["temperature_raw"], errors="coerce")
    df["temperature"] = pd.to_numeric(df["temperature"], errors="coerce")
    return df


def export_csv(settings: Settings, session=None) -> str:
    out_dir = settings.EXPORT_DIR
    os.makedirs(out_dir, exist_ok=True)

    sensors = fetch_sensors(settings, session=session)
    df = rows_to_dataframe(build_rows(sensors, settings.SENSOR_TYPE))

    ts = datetime.now().strftime("%Y%m%d_%H%M")
    path = os.path.join(out_dir, f"hue_{settings.SENSOR_TYPE}_{ts}.csv")
    df.to_csv(path, index=False, encoding="utf-8-sig")

    print("== EXPORT CSV ==")
    print("Filas:", len(df))
    print("Archivo:", path)
    return path


if __name__ == "__main__":
    try:
        export_csv(Settings.from_env().validate(require_sheet=False))
    except Exception as e:
        print("ERROR en export_csv:", repr(e))
        sys.exit(1)
