"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas import (
    BuildingSummary,
    Reading,
    ReadingCreate,
    ReadingList,
    SensorSummary,
    SimulateRequest,
)
from services.monitor import MonitorService, build_default_monitor

router = APIRouter()


def get_monitor() -> MonitorService:
    return build_default_monitor()


def _summarize(monitor: MonitorService, name: str) -> SensorSummary:
    sensor = monitor.get_sensor(name)
    return SensorSummary.from_sensor(
        sensor,
        reading_count=monitor.reading_count(name),
        latest=monitor.latest(name),
    )


def _not_found(exc: KeyError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=exc.args[0] if exc.args else "Sensor not found.",
    )


@router.get(
    "/building",
    response_model=BuildingSummary,
    summary="Describe the building and its sensors in display order.",
)
async def get_building(
    monitor: MonitorService = Depends(get_monitor),
) -> BuildingSummary:
    return BuildingSummary(
        name=monitor.building.name,
        sensors=[_summarize(monitor, sensor.name) for sensor in monitor.list_sensors()],
    )


@router.get(
    "/sensors/{name}",
    response_model=SensorSummary,
    summary="Describe a single sensor.",
)
async def get_sensor(
    name: str,
    monitor: MonitorService = Depends(get_monitor),
) -> SensorSummary:
    try:
        return _summarize(monitor, name)
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.get(
    "/sensors/{name}/readings",
    response_model=ReadingList,
    summary="List a sensor's readings, oldest first.",
)
async def list_readings(
    name: str,
    since: Optional[datetime] = Query(
        default=None, description="Only return readings strictly after this instant."
    ),
    monitor: MonitorService = Depends(get_monitor),
) -> ReadingList:
    try:
        readings = monitor.readings(name, since=since)
    except KeyError as exc:
        raise _not_found(exc) from exc
    return ReadingList(sensor=name, readings=[Reading.from_record(r) for r in readings])


@router.post(
    "/sensors/{name}/readings",
    status_code=status.HTTP_201_CREATED,
    response_model=Reading,
    summary="Append a live reading to a sensor.",
)
async def create_reading(
    name: str,
    payload: ReadingCreate,
    monitor: MonitorService = Depends(get_monitor),
) -> Reading:
    try:
        reading = monitor.record_reading(name, payload.timestamp, payload.value)
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    return Reading.from_record(reading)


@router.post(
    "/sensors/{name}/simulate",
    status_code=status.HTTP_201_CREATED,
    response_model=Reading,
    summary="Generate and record the simulated value for a sensor.",
)
async def simulate_reading(
    name: str,
    payload: Optional[SimulateRequest] = None,
    monitor: MonitorService = Depends(get_monitor),
) -> Reading:
    timestamp = payload.timestamp if payload is not None else None
    try:
        reading = monitor.simulate_reading(name, timestamp)
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    return Reading.from_record(reading)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /building for the monitored sensors."}
