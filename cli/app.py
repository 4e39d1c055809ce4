from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_building, render_readings, render_sample
from logging_config import configure_logging
from models.records import as_utc
from services.sample_data import SAMPLE_ROSTER
from services.signals import reading_for, sensor_index

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Simulator for the building sensor monitor.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _parse_instant(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(candidate))
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid ISO 8601 timestamp: {value!r}") from exc


def _roster_values(instant: datetime) -> list[tuple[str, str, float]]:
    return [
        (
            definition.name,
            definition.kind.value,
            reading_for(definition.kind, sensor_index(definition.name), instant),
        )
        for definition in SAMPLE_ROSTER
    ]


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Monitor API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        help="Seconds between streamed ticks (defaults to SIMULATOR_INTERVAL env or 5).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    config = load_config(base_url=base_url, interval=interval)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("sample")
def sample_command(
    at: Optional[str] = typer.Option(
        None, "--at", help="ISO 8601 instant to simulate (defaults to now, UTC)."
    ),
) -> None:
    """Print every roster sensor's simulated value without contacting the API."""
    instant = _parse_instant(at) or datetime.now(timezone.utc)
    render_sample(instant.isoformat(), _roster_values(instant))


@app.command("building")
def building_command(ctx: typer.Context) -> None:
    """Show the monitored building and the latest reading of each sensor."""
    state = _get_state(ctx)
    render_building(state.client.get_building())


@app.command("history")
def history_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Sensor name, e.g. temp-point-0."),
    since: Optional[str] = typer.Option(
        None, "--since", help="Only show readings after this ISO 8601 instant."
    ),
) -> None:
    """Fetch and print a sensor's reading history."""
    state = _get_state(ctx)
    render_readings(state.client.get_readings(name, since=_parse_instant(since)))


@app.command("stream")
def stream_command(
    ctx: typer.Context,
    count: int = typer.Option(
        1, "--count", "-n", min=1, help="Number of ticks to send before exiting."
    ),
    interval: Optional[float] = typer.Option(
        None, "--interval", help="Override the seconds between ticks."
    ),
) -> None:
    """Generate live readings for every roster sensor and send them to the API."""
    state = _get_state(ctx)
    pause = interval if interval is not None else state.config.interval
    typer.echo(
        f"Streaming {len(SAMPLE_ROSTER)} sensors to {state.config.base_url} "
        f"({count} ticks, interval={pause}s)..."
    )

    sent = 0
    for tick in range(count):
        if tick:
            time.sleep(pause)
        instant = datetime.now(timezone.utc)
        for name, _kind, value in _roster_values(instant):
            state.client.post_reading(name, instant, value)
            sent += 1
        logger.debug("Streamed tick", extra={"timestamp": instant, "reading_count": sent})

    typer.secho(f"Sent {sent} readings.", fg=typer.colors.GREEN)
