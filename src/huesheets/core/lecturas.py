# huesheets/core/lecturas.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)

TEMPERATURE_SENSOR_TYPE = "ZLLTemperature"


@dataclass(frozen=True)
class SensorReading:
    type: str
    unique_id: str
    last_updated: str
    temperature_raw: Optional[int]

    @classmethod
    def from_hue(cls, sensor: Mapping) -> "SensorReading":
        state = sensor.get("state") or {}
        return cls(
            type=sensor.get("type", ""),
            unique_id=sensor.get("uniqueid", ""),
            last_updated=state.get("lastupdated", ""),
            temperature_raw=state.get("temperature"),
        )

    @property
    def temperature(self) -> Optional[float]:
        # El gateway informa centésimas de grado; null si el sensor todavía no reportó
        if self.temperature_raw is None:
            return None
        return self.temperature_raw / 100

    def to_row(self) -> list:
        """Fila para el append: [lastupdated, uniqueid, temp cruda, temp / 100]."""
        return [self.last_updated, self.unique_id, self.temperature_raw, self.temperature]


def iter_readings(sensors: Mapping, sensor_type: str = TEMPERATURE_SENSOR_TYPE) -> Iterator[SensorReading]:
    # Respeta el orden de la respuesta; los sensores de otro tipo se descartan
    for _index, sensor in sensors.items():
        if not isinstance(sensor, Mapping) or sensor.get("type") != sensor_type:
            continue
        yield SensorReading.from_hue(sensor)


def build_rows(sensors: Mapping, sensor_type: str = TEMPERATURE_SENSOR_TYPE) -> List[list]:
    rows = []
    for reading in iter_readings(sensors, sensor_type):
        rows.append(reading.to_row())
        if reading.temperature is None:
            logger.warning("Sensor %s sin temperatura reportada (lastupdated=%s)", reading.unique_id, reading.last_updated)
            continue
        logger.info(
            "Temperatura de %s a las %s para el sensor %s",
            reading.temperature, reading.last_updated, reading.unique_id,
        )
    return rows


def count_by_type(sensors: Mapping) -> dict:
    counts: dict = {}
    for sensor in sensors.values():
        kind = sensor.get("type", "?") if isinstance(sensor, Mapping) else "?"
        counts[kind] = counts.get(kind, 0) + 1
    return counts
