from __future__ import annotations

from typing import Iterator

import pytest

from settings import DEFAULT_MAX_READINGS, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch) -> Iterator[None]:
    for name in ("MONITOR_BUILDING_NAME", "SENSOR_MAX_READINGS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_apply_without_environment() -> None:
    settings = get_settings()

    assert settings.building_name is None
    assert settings.max_readings == DEFAULT_MAX_READINGS
    assert settings.log_level == "INFO"


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("MONITOR_BUILDING_NAME", "  Cardiology  ")
    monkeypatch.setenv("SENSOR_MAX_READINGS", "288")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.building_name == "Cardiology"
    assert settings.max_readings == 288
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("", DEFAULT_MAX_READINGS), ("abc", DEFAULT_MAX_READINGS), ("-4", DEFAULT_MAX_READINGS), ("0", None)],
)
def test_max_readings_parsing(monkeypatch, raw: str, expected) -> None:
    monkeypatch.setenv("SENSOR_MAX_READINGS", raw)

    assert get_settings().max_readings == expected


def test_blank_building_name_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("MONITOR_BUILDING_NAME", "   ")

    assert get_settings().building_name is None
