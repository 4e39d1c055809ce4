from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from typer.testing import CliRunner

from cli.app import app
from cli.config import DEFAULT_INTERVAL, load_config
from services.sample_data import SAMPLE_ROSTER
from services.signals import humidity_reading


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.posted: List[tuple[str, datetime, float]] = []
        self.readings_calls: List[tuple[str, Optional[datetime]]] = []
        self.closed = False

    def get_building(self) -> Dict[str, Any]:
        return {
            "name": "Neonatal Intensive Care Unit",
            "sensors": [
                {
                    "name": "moisture-plant-0",
                    "kind": "moisture",
                    "display_category": "Room 1",
                    "display_name": "Felix Hoyer",
                    "reading_count": 72,
                    "latest": {"timestamp": "2023-12-31T23:55:00Z", "value": 28.123},
                }
            ],
        }

    def get_readings(self, name: str, since: Optional[datetime] = None) -> Dict[str, Any]:
        self.readings_calls.append((name, since))
        return {
            "sensor": name,
            "readings": [{"timestamp": "2023-12-31T23:55:00Z", "value": 65.5}],
        }

    def post_reading(self, name: str, timestamp: datetime, value: float) -> Dict[str, Any]:
        self.posted.append((name, timestamp, value))
        return {"timestamp": timestamp.isoformat(), "value": value}

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    client = StubClient(config=None)

    def factory(config):
        client.config = config
        return client

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return client


def test_sample_prints_every_roster_sensor(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["sample", "--at", "2024-01-01T00:00:00Z"])

    assert result.exit_code == 0
    for definition in SAMPLE_ROSTER:
        assert definition.name in result.stdout
    expected = humidity_reading(datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert f"humidity (humidity): {expected:.2f}" in result.stdout
    assert stub.posted == []


def test_sample_rejects_invalid_instant(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["sample", "--at", "yesterday"])

    assert result.exit_code != 0


def test_building_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["building"])

    assert result.exit_code == 0
    assert "Neonatal Intensive Care Unit" in result.stdout
    assert "[Room 1] Felix Hoyer (moisture): 72 readings, latest=28.12" in result.stdout
    assert stub.closed is True


def test_history_command_passes_since(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["history", "humidity", "--since", "2023-12-31T23:00:00Z"])

    assert result.exit_code == 0
    assert "Readings for humidity" in result.stdout
    assert "count: 1" in result.stdout
    assert stub.readings_calls == [
        ("humidity", datetime(2023, 12, 31, 23, 0, tzinfo=timezone.utc))
    ]


def test_stream_posts_each_sensor_per_tick(monkeypatch, runner: CliRunner, stub: StubClient) -> None:
    sleeps: List[float] = []
    monkeypatch.setattr("cli.app.time.sleep", sleeps.append)

    result = runner.invoke(app, ["--base-url", "http://monitor:9000/", "stream", "-n", "2", "--interval", "0.5"])

    assert result.exit_code == 0
    assert len(stub.posted) == 2 * len(SAMPLE_ROSTER)
    assert sleeps == [0.5]
    assert f"Sent {2 * len(SAMPLE_ROSTER)} readings." in result.stdout
    assert stub.config.base_url == "http://monitor:9000"
    first_tick = {timestamp for _, timestamp, _ in stub.posted[: len(SAMPLE_ROSTER)]}
    assert len(first_tick) == 1


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://example.test/")
    monkeypatch.setenv("SIMULATOR_INTERVAL", "nope")

    config = load_config()

    assert config.base_url == "http://example.test"
    assert config.interval == DEFAULT_INTERVAL
