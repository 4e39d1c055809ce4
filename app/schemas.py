"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.records import Sensor, SensorKind, SensorReading
from services.signals import NOMINAL_BANDS, sensor_index


class Reading(BaseModel):
    """A single timestamped sample."""

    timestamp: datetime
    value: float

    @classmethod
    def from_record(cls, reading: SensorReading) -> "Reading":
        return cls(timestamp=reading.timestamp, value=reading.value)


class ReadingCreate(BaseModel):
    """Payload for appending a live reading to a sensor."""

    timestamp: datetime = Field(..., description="UTC instant; naive values are taken as UTC.")
    value: float = Field(..., allow_inf_nan=False)


class SimulateRequest(BaseModel):
    """Ask the server to generate and record a reading."""

    timestamp: Optional[datetime] = Field(
        default=None, description="Instant to simulate; defaults to the current UTC time."
    )


class SensorSummary(BaseModel):
    """Sensor identity, display grouping and the state of its history."""

    name: str
    kind: SensorKind
    display_category: str
    display_name: str
    sensor_index: int = Field(..., ge=0, description="Phase seed derived from the sensor name.")
    nominal_min: float
    nominal_max: float
    reading_count: int = Field(..., ge=0)
    latest: Optional[Reading] = None

    @classmethod
    def from_sensor(
        cls, sensor: Sensor, reading_count: int, latest: Optional[SensorReading]
    ) -> "SensorSummary":
        band = NOMINAL_BANDS[sensor.kind]
        return cls(
            name=sensor.name,
            kind=sensor.kind,
            display_category=sensor.display_category,
            display_name=sensor.display_name,
            sensor_index=sensor_index(sensor.name),
            nominal_min=band.minimum,
            nominal_max=band.maximum,
            reading_count=reading_count,
            latest=Reading.from_record(latest) if latest is not None else None,
        )


class BuildingSummary(BaseModel):
    name: str
    sensors: List[SensorSummary] = Field(default_factory=list)


class ReadingList(BaseModel):
    sensor: str
    readings: List[Reading] = Field(default_factory=list)
