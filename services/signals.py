"""Deterministic signal generators for simulated sensor readings.

Every generator is a pure function of its inputs: the same sensor index and
timestamp always produce the same value, so the seeded history and readings
streamed later by the simulator line up on one continuous curve.

Timestamps are converted to seconds since the Unix epoch (UTC) before any
math is applied, which keeps the curves independent of the local timezone.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, NamedTuple, Optional

from models.records import SensorKind, as_utc

_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193

TEMPERATURE_WAVELENGTH_HOURS = 6
HUMIDITY_WAVELENGTH_HOURS = 12
MOISTURE_WAVELENGTH_HOURS = 2.5

_TEMPERATURE_PHASE_STEP_SECONDS = 15 * 60
_MOISTURE_PHASE_STEP_SECONDS = 160
_MOISTURE_HARMONICS = 6
_MOISTURE_OFFSET = 2.0


class Band(NamedTuple):
    minimum: float
    maximum: float

    @property
    def span(self) -> float:
        return self.maximum - self.minimum

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


TEMPERATURE_BAND = Band(27.0, 30.0)
HUMIDITY_BAND = Band(60.0, 70.0)
MOISTURE_BAND = Band(27.0, 30.0)

NOMINAL_BANDS: Dict[SensorKind, Band] = {
    SensorKind.temperature: TEMPERATURE_BAND,
    SensorKind.humidity: HUMIDITY_BAND,
    SensorKind.moisture: MOISTURE_BAND,
}


def _envelope(band: Band, low: float, high: float, divisor: float, shift: float) -> Band:
    scale = band.span / divisor
    return Band(band.minimum + scale * (low + shift), band.minimum + scale * (high + shift))


# The noise terms push the curves past the nominal band; these are the hard
# limits each formula can reach.
_SENSOR_NOISE = 1 / 3 + 1 / 9
_HUMIDITY_NOISE = 1 / 3
# Peak of sum(sin(i*x) / i for i in 1..6), reached near x = pi / 7 (about
# 1.62219), rounded up; the minimum is its negative.
_HARMONIC_PEAK = 1.6223

SIGNAL_ENVELOPES: Dict[SensorKind, Band] = {
    SensorKind.temperature: _envelope(
        TEMPERATURE_BAND, -1 - _SENSOR_NOISE, 1 + _SENSOR_NOISE, 2, 1
    ),
    SensorKind.humidity: _envelope(
        HUMIDITY_BAND, -1 - _HUMIDITY_NOISE, 1 + _HUMIDITY_NOISE, 2, 1
    ),
    SensorKind.moisture: _envelope(
        MOISTURE_BAND,
        _MOISTURE_OFFSET - _HARMONIC_PEAK - _SENSOR_NOISE,
        _MOISTURE_OFFSET + _HARMONIC_PEAK + _SENSOR_NOISE,
        4,
        0,
    ),
}


def sensor_index(name: str) -> int:
    """Derive a stable seed from a sensor name (32-bit FNV-1a over UTF-8)."""
    digest = _FNV_OFFSET_BASIS
    for byte in name.encode("utf-8"):
        digest ^= byte
        digest = (digest * _FNV_PRIME) & 0xFFFFFFFF
    return digest


def _epoch_seconds(timestamp: datetime) -> float:
    return as_utc(timestamp).timestamp()


def _sensor_noise(sensor_index: int, seconds: float) -> float:
    return (
        math.sin(seconds / (15 * 60 + sensor_index % 5)) / 3
        + math.sin(seconds / (40 * 60 + sensor_index % 8)) / 9
    )


def temperature_reading(sensor_index: int, timestamp: datetime) -> float:
    seconds = _epoch_seconds(timestamp)
    phase = _TEMPERATURE_PHASE_STEP_SECONDS * (sensor_index % 5)
    wavelengths = (seconds + phase) / (TEMPERATURE_WAVELENGTH_HOURS * 60 * 60)
    y = math.sin(wavelengths * 2 * math.pi)
    y += _sensor_noise(sensor_index, seconds)
    return TEMPERATURE_BAND.minimum + TEMPERATURE_BAND.span * ((y + 1) / 2)


def humidity_reading(timestamp: datetime) -> float:
    """Building-wide humidity; there is a single humidity signal."""
    seconds = _epoch_seconds(timestamp)
    wavelengths = seconds / (HUMIDITY_WAVELENGTH_HOURS * 60 * 60)
    y = math.sin(wavelengths * 2 * math.pi)
    y += math.sin(seconds / (15 * 60)) / 3
    return HUMIDITY_BAND.minimum + HUMIDITY_BAND.span * ((y + 1) / 2)


def moisture_reading(sensor_index: int, timestamp: datetime) -> float:
    """Sawtooth-like drying curve built from the first harmonics of a Fourier series.

    Unlike the other generators the raw sum already sits around [0, 4], so it
    is rescaled with ``y / 4`` rather than ``(y + 1) / 2``.
    """
    seconds = _epoch_seconds(timestamp)
    phase = _MOISTURE_PHASE_STEP_SECONDS * (sensor_index % 60)
    x = 2 * math.pi * (seconds + phase) / (MOISTURE_WAVELENGTH_HOURS * 60 * 60)
    y = _MOISTURE_OFFSET
    for i in range(1, _MOISTURE_HARMONICS + 1):
        y += math.sin(i * x) / i
    y += _sensor_noise(sensor_index, seconds)
    return MOISTURE_BAND.minimum + MOISTURE_BAND.span * y / 4


def reading_for(kind: SensorKind, sensor_index: Optional[int], timestamp: datetime) -> float:
    """Dispatch to the generator for ``kind``; humidity ignores the index."""
    if kind is SensorKind.humidity:
        return humidity_reading(timestamp)
    if sensor_index is None:
        raise ValueError(f"A sensor index is required for {kind.value} readings.")
    if kind is SensorKind.temperature:
        return temperature_reading(sensor_index, timestamp)
    if kind is SensorKind.moisture:
        return moisture_reading(sensor_index, timestamp)
    raise ValueError(f"Unsupported sensor kind: {kind!r}")
