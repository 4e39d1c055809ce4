from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _format_value(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:.2f}"
    return str(value)


def render_sample(instant: str, rows: Sequence[tuple[str, str, float]]) -> None:
    echo_heading(f"Simulated readings at {instant}")
    for name, kind, value in rows:
        typer.echo(f"  - {name} ({kind}): {_format_value(value)}")


def render_readings(payload: Dict[str, Any]) -> None:
    readings = payload.get("readings") or []
    echo_heading(f"Readings for {payload.get('sensor')}")
    echo_key_values([("count", len(readings))])
    if not readings:
        typer.echo("No readings recorded.")
        return
    for reading in readings:
        typer.echo(f"  - {reading.get('timestamp')}: {_format_value(reading.get('value'))}")


def render_building(payload: Dict[str, Any]) -> None:
    echo_heading(str(payload.get("name")))
    sensors = payload.get("sensors") or []
    if not sensors:
        typer.echo("No sensors registered.")
        return
    for sensor in sensors:
        latest = sensor.get("latest") or {}
        typer.echo(
            f"  - [{sensor.get('display_category')}] {sensor.get('display_name')} "
            f"({sensor.get('kind')}): {sensor.get('reading_count')} readings, "
            f"latest={_format_value(latest.get('value', 'n/a'))}"
        )
