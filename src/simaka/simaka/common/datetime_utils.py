from __future__ import annotations

from datetime import date, datetime, time
from typing import Union

from ..core.constants import CLOCK_FORMAT
from ..core.exceptions import ValidationError

ClockValue = Union[datetime, time, str]

_CLOCK_INPUT_FORMATS = (CLOCK_FORMAT, "%H:%M:%S")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("Date must be YYYY-MM-DD")


def format_clock(value: ClockValue) -> str:
    """Render a wall-clock value as HH:MM.

    Strings must be "HH:MM" or "HH:MM:SS"; seconds are dropped.
    """

    if isinstance(value, str):
        for fmt in _CLOCK_INPUT_FORMATS:
            try:
                value = datetime.strptime(value.strip(), fmt)
                break
            except ValueError:
                continue
        else:
            raise ValidationError("Clock time must be HH:MM or HH:MM:SS")
    return value.strftime(CLOCK_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
