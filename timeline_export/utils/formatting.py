"""Formatting helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MIN_MOMENT = datetime.min.replace(tzinfo=timezone.utc)
MAX_MOMENT = datetime.max.replace(microsecond=0, tzinfo=timezone.utc)
_MIN_SECONDS = (MIN_MOMENT - EPOCH) // timedelta(seconds=1)
_MAX_SECONDS = (MAX_MOMENT - EPOCH) // timedelta(seconds=1)


def format_utc_iso8601(timestamp_ms: int) -> str:
    """Render epoch milliseconds as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC.

    Sub-second precision is truncated. Values beyond what ``datetime`` can
    hold are clamped to 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z.
    """

    seconds = timestamp_ms // 1000
    if seconds < _MIN_SECONDS:
        moment = MIN_MOMENT
    elif seconds > _MAX_SECONDS:
        moment = MAX_MOMENT
    else:
        moment = EPOCH + timedelta(seconds=seconds)
    return moment.replace(tzinfo=None).isoformat(timespec="seconds") + "Z"


def format_coordinate(value: float) -> str:
    """Return the shortest fixed-point text that reads back as the same float."""

    return format(Decimal(repr(float(value))), "f")
