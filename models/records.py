"""Domain models for the monitored building."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Deque, Dict, Iterator, List, Optional, Tuple


def as_utc(timestamp: datetime) -> datetime:
    """Return ``timestamp`` as an aware UTC datetime; naive values are taken as UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


class SensorKind(str, Enum):
    """Physical quantity a sensor reports; selects the signal generator."""

    humidity = "humidity"
    temperature = "temperature"
    moisture = "moisture"


@dataclass(frozen=True, slots=True)
class SensorReading:
    """A single immutable sample."""

    timestamp: datetime
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", as_utc(self.timestamp))
        object.__setattr__(self, "value", float(self.value))


@dataclass(eq=False)
class Sensor:
    """A named sensor and its reading history, oldest first.

    Readings are appended at the tail only. When ``max_readings`` is set the
    oldest reading is dropped once the bound is reached.
    """

    name: str
    kind: SensorKind
    display_category: Optional[str] = None
    display_name: Optional[str] = None
    max_readings: Optional[int] = None
    _readings: Deque[SensorReading] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_readings is not None and self.max_readings <= 0:
            raise ValueError("max_readings must be positive when set.")
        if self.display_category is None:
            self.display_category = self.name
        if self.display_name is None:
            self.display_name = self.name
        self._readings = deque(maxlen=self.max_readings)

    @property
    def readings(self) -> Tuple[SensorReading, ...]:
        return tuple(self._readings)

    @property
    def latest(self) -> Optional[SensorReading]:
        return self._readings[-1] if self._readings else None

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[SensorReading]:
        return iter(self._readings)

    def add_reading(self, reading: SensorReading) -> None:
        latest = self.latest
        if latest is not None and reading.timestamp <= latest.timestamp:
            raise ValueError(
                f"Reading at {reading.timestamp.isoformat()} is not after the latest "
                f"reading of sensor {self.name!r} ({latest.timestamp.isoformat()})."
            )
        self._readings.append(reading)


@dataclass(eq=False)
class Building:
    """A named building owning an ordered set of uniquely named sensors."""

    name: str
    _sensors: Dict[str, Sensor] = field(default_factory=dict, init=False, repr=False)

    @property
    def sensors(self) -> Tuple[Sensor, ...]:
        return tuple(self._sensors.values())

    def sensor_names(self) -> List[str]:
        return list(self._sensors)

    def add_sensor(self, sensor: Sensor) -> None:
        if sensor.name in self._sensors:
            raise ValueError(
                f"Sensor {sensor.name!r} already exists in building {self.name!r}."
            )
        self._sensors[sensor.name] = sensor

    def get_sensor(self, name: str) -> Sensor:
        try:
            return self._sensors[name]
        except KeyError:
            raise KeyError(f"Sensor {name!r} not found in building {self.name!r}.") from None
