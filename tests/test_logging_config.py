from __future__ import annotations

import logging
from datetime import datetime, timezone

from logging_config import ContextualFormatter, sensor_context
from models.records import SensorKind


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.monitor",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Recorded reading",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_sensor_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    context = sensor_context(
        "temp-point-0",
        SensorKind.temperature,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        value=28.12345,
    )

    message = formatter.format(_record(**context))

    assert message == (
        "Recorded reading | sensor=temp-point-0 kind=temperature "
        "timestamp=2024-01-01T00:00:00+00:00 value=28.123"
    )


def test_formatter_leaves_plain_messages_untouched() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record()) == "Recorded reading"
