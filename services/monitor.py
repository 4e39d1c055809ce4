"""In-memory monitor holding the live building for the process lifetime."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import List, Optional

from logging_config import sensor_context
from models.records import Building, Sensor, SensorReading, as_utc
from services.sample_data import build_sample_building, simulated_value
from settings import get_settings

logger = logging.getLogger(__name__)


class MonitorService:
    """Serialises appends to the building's reading sequences.

    Sensors are not safe for concurrent mutation on their own, so every
    read and write of reading history goes through ``_lock``.
    """

    def __init__(self, building: Building) -> None:
        self.building = building
        self._lock = Lock()

    def list_sensors(self) -> List[Sensor]:
        return list(self.building.sensors)

    def get_sensor(self, name: str) -> Sensor:
        return self.building.get_sensor(name)

    def readings(self, name: str, since: Optional[datetime] = None) -> List[SensorReading]:
        """Snapshot of a sensor's readings, optionally only those after ``since``."""
        sensor = self.building.get_sensor(name)
        with self._lock:
            snapshot = list(sensor)
        if since is None:
            return snapshot
        cutoff = as_utc(since)
        return [reading for reading in snapshot if reading.timestamp > cutoff]

    def latest(self, name: str) -> Optional[SensorReading]:
        sensor = self.building.get_sensor(name)
        with self._lock:
            return sensor.latest

    def reading_count(self, name: str) -> int:
        sensor = self.building.get_sensor(name)
        with self._lock:
            return len(sensor)

    def record_reading(self, name: str, timestamp: datetime, value: float) -> SensorReading:
        sensor = self.building.get_sensor(name)
        reading = SensorReading(timestamp=timestamp, value=value)
        with self._lock:
            try:
                sensor.add_reading(reading)
            except ValueError as exc:
                logger.warning(
                    "Rejected out-of-order reading",
                    extra=sensor_context(
                        name, sensor.kind, timestamp=reading.timestamp, reason=str(exc)
                    ),
                )
                raise
        logger.debug(
            "Recorded reading",
            extra=sensor_context(
                name, sensor.kind, timestamp=reading.timestamp, value=reading.value
            ),
        )
        return reading

    def simulate_reading(self, name: str, timestamp: Optional[datetime] = None) -> SensorReading:
        """Generate the value for ``name`` at ``timestamp`` (default: now) and record it."""
        sensor = self.building.get_sensor(name)
        instant = as_utc(timestamp) if timestamp is not None else datetime.now(timezone.utc)
        return self.record_reading(name, instant, simulated_value(sensor, instant))


@lru_cache
def build_default_monitor(reference_instant: Optional[datetime] = None) -> MonitorService:
    """Factory that seeds the monitor from the sample roster and settings."""
    settings = get_settings()
    instant = reference_instant or datetime.now(timezone.utc)
    building = build_sample_building(
        instant,
        name=settings.building_name,
        max_readings=settings.max_readings,
    )
    return MonitorService(building)
