"""Daily and monthly attendance rollups.

Everything here is a pure function of its arguments: no I/O, no clock reads
except the explicit ``now`` passed to :func:`shift_display_status`.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import DayStatus, ShiftStatus
from ..shifts.model import ShiftConfig
from .model import DailyAggregate, MonthlyStats, ShiftRecord


def derive_day_status(records: Sequence[ShiftRecord]) -> DayStatus:
    """Reduce all shift records of one day to a single status.

    The rule looks at the whole set, never at a single record:
    all absent -> absent; all completed -> completed; any checked_in or
    pending -> pending; anything else (e.g. completed + absent, or a status
    value we do not recognise) -> absent.
    """

    if not records:
        raise ValueError("derive_day_status needs at least one record")

    statuses = [r.status for r in records]
    if all(s == ShiftStatus.ABSENT for s in statuses):
        return DayStatus.ABSENT
    if all(s == ShiftStatus.COMPLETED for s in statuses):
        return DayStatus.COMPLETED
    if any(s in (ShiftStatus.CHECKED_IN, ShiftStatus.PENDING) for s in statuses):
        return DayStatus.PENDING
    return DayStatus.ABSENT


def group_by_day(records: Iterable[ShiftRecord]) -> dict[date, list[ShiftRecord]]:
    by_day: dict[date, list[ShiftRecord]] = defaultdict(list)
    for r in records:
        by_day[r.work_date].append(r)
    return dict(by_day)


def daily_aggregates(records: Iterable[ShiftRecord]) -> list[DailyAggregate]:
    """One aggregate per date that has records, oldest first."""

    grouped = group_by_day(records)
    return [
        DailyAggregate(work_date=day, status=derive_day_status(items), records=tuple(items))
        for day, items in sorted(grouped.items())
    ]


def aggregate_daily(records: Iterable[ShiftRecord]) -> dict[date, DayStatus]:
    return {agg.work_date: agg.status for agg in daily_aggregates(records)}


def records_between(records: Iterable[ShiftRecord], start: date, end: date) -> list[ShiftRecord]:
    return [r for r in records if start <= r.work_date <= end]


def monthly_stats(records: Iterable[ShiftRecord], reference: date) -> MonthlyStats:
    """Count days of ``reference``'s calendar month by aggregated status."""

    if isinstance(reference, datetime):
        reference = reference.date()
    start, end = month_bounds(reference)
    days = aggregate_daily(records_between(records, start, end))

    counts = {status: 0 for status in DayStatus}
    for status in days.values():
        counts[status] += 1

    return MonthlyStats(
        total_shifts=len(days),
        completed_shifts=counts[DayStatus.COMPLETED],
        pending_shifts=counts[DayStatus.PENDING],
        absent_shifts=counts[DayStatus.ABSENT],
    )


def shift_display_status(config: ShiftConfig, record: Optional[ShiftRecord], now: datetime) -> ShiftStatus:
    """Point-in-time status of one of today's shifts.

    Unlike :func:`derive_day_status` this consults the clock: a shift whose
    scheduled end has passed without a check-in shows as absent even while
    the stored record still says pending.
    """

    has_check_in = record is not None and record.check_in is not None
    shift_end = datetime.combine(now.date(), config.end_time)
    if not has_check_in and now > shift_end:
        return ShiftStatus.ABSENT
    if record is None:
        return ShiftStatus.PENDING
    return record.status
