"""Builds the demo building and back-fills its sensors with simulated history."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple

from logging_config import sensor_context
from models.records import Building, Sensor, SensorKind, SensorReading, as_utc
from services.signals import reading_for, sensor_index

logger = logging.getLogger(__name__)

SAMPLE_BUILDING_NAME = "Neonatal Intensive Care Unit"
BACKFILL_WINDOW = timedelta(hours=6)
BACKFILL_STEP = timedelta(minutes=5)
# Readings one backfill produces; retention bounds never cut into them.
SEED_READING_COUNT = BACKFILL_WINDOW // BACKFILL_STEP


@dataclass(frozen=True)
class SensorDefinition:
    name: str
    kind: SensorKind
    display_category: Optional[str] = None
    display_name: Optional[str] = None


SAMPLE_ROSTER: Tuple[SensorDefinition, ...] = (
    SensorDefinition("humidity", SensorKind.humidity),
    SensorDefinition("temp-point-0", SensorKind.temperature),
    SensorDefinition("temp-point-1", SensorKind.temperature),
    SensorDefinition("temp-point-2", SensorKind.temperature),
    SensorDefinition("temp-point-3", SensorKind.temperature),
    SensorDefinition("moisture-plant-0", SensorKind.moisture, "Room 1", "Felix Hoyer"),
    SensorDefinition("moisture-plant-1", SensorKind.moisture, "Room 2", "Vitor Vidal"),
    SensorDefinition("moisture-plant-2", SensorKind.moisture, "Room 2", "Aurora Vidal"),
    SensorDefinition("moisture-plant-3", SensorKind.moisture, "Room 3", "June Huger"),
    SensorDefinition("moisture-plant-4", SensorKind.moisture, "Room 3", "Jewel Huger"),
)


def simulated_value(sensor: Sensor, timestamp: datetime) -> float:
    """Generator output for ``sensor`` at ``timestamp``."""
    return reading_for(sensor.kind, sensor_index(sensor.name), timestamp)


def backfill_sensor(
    sensor: Sensor,
    reference_instant: datetime,
    window: timedelta = BACKFILL_WINDOW,
    step: timedelta = BACKFILL_STEP,
) -> int:
    """Append readings for ``[reference_instant - window, reference_instant)``.

    Returns the number of readings appended.
    """
    if step <= timedelta(0):
        raise ValueError("Backfill step must be positive.")

    end = as_utc(reference_instant)
    index = sensor_index(sensor.name)
    timestamp = end - window
    appended = 0
    while timestamp < end:
        value = reading_for(sensor.kind, index, timestamp)
        sensor.add_reading(SensorReading(timestamp=timestamp, value=value))
        appended += 1
        timestamp += step
    return appended


def create_sample_sensor(
    definition: SensorDefinition,
    reference_instant: datetime,
    max_readings: Optional[int] = None,
) -> Sensor:
    if max_readings is not None and max_readings < SEED_READING_COUNT:
        logger.warning(
            "Raising retention bound to fit the seeded history",
            extra=sensor_context(
                definition.name, definition.kind, reading_count=SEED_READING_COUNT
            ),
        )
        max_readings = SEED_READING_COUNT
    sensor = Sensor(
        name=definition.name,
        kind=definition.kind,
        display_category=definition.display_category,
        display_name=definition.display_name,
        max_readings=max_readings,
    )
    count = backfill_sensor(sensor, reference_instant)
    logger.debug(
        "Back-filled sensor history",
        extra=sensor_context(sensor.name, sensor.kind, reading_count=count),
    )
    return sensor


def build_sample_building(
    reference_instant: datetime,
    name: Optional[str] = None,
    max_readings: Optional[int] = None,
) -> Building:
    """Create the demo building with every roster sensor ending at ``reference_instant``."""
    building = Building(name=name or SAMPLE_BUILDING_NAME)
    for definition in SAMPLE_ROSTER:
        building.add_sensor(create_sample_sensor(definition, reference_instant, max_readings))

    logger.info(
        "Built sample building",
        extra={
            "building": building.name,
            "reading_count": sum(len(sensor) for sensor in building.sensors),
            "timestamp": as_utc(reference_instant),
        },
    )
    return building
