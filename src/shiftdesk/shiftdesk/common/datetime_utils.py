from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Ngày không hợp lệ: {value!r}")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    # Accept full ISO timestamps from clients, keep only the date part.
    return parse_iso_date(str(value).split("T")[0])


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(reference: date) -> tuple[date, date]:
    """First and last day of the month containing ``reference``."""
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def week_bounds(reference: date) -> tuple[date, date]:
    """Monday..Sunday of the week containing ``reference``."""
    start = reference - timedelta(days=reference.weekday())
    return start, start + timedelta(days=6)


def fmt_time(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else "-"
