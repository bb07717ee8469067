"""Timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], str]


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2026-01-02T03:04:05.678Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def fixed_clock(timestamp: str) -> Clock:
    """Clock that always returns ``timestamp``."""
    return lambda: timestamp
