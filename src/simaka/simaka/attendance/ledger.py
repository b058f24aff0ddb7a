"""Attendance ledger: status transitions and aggregate statistics.

Both operations are pure. They never touch storage and never mutate their
inputs; the caller persists the returned record (see AttendanceService).
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Union

from ..common.datetime_utils import ClockValue, format_clock
from ..core.constants import NOT_RECORDED, TOTAL_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidStatusError
from .model import AttendanceRecord, AttendanceStats

# Which lifetime counter a status feeds. Used for both reversal and
# application so that re-applying the same status nets to zero.
COUNTER_FIELD: dict[AttendanceStatus, Optional[str]] = {
    AttendanceStatus.PRESENT: None,
    AttendanceStatus.LATE: "late_count",
    AttendanceStatus.ABSENT: "absent_count",
    AttendanceStatus.EXCUSED_PERMISSION: "permission_count",
    AttendanceStatus.EXCUSED_SICK: "permission_count",
    AttendanceStatus.UNSET: None,
}

VALID_TARGETS = frozenset(s for s in AttendanceStatus if s is not AttendanceStatus.UNSET)
TIMED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})
PERMISSION_STATUSES = frozenset({AttendanceStatus.EXCUSED_PERMISSION, AttendanceStatus.EXCUSED_SICK})


def round_half_up(numerator: int, denominator: int) -> int:
    # Integer form of floor(n / d + 0.5), matching Math.round for positive d.
    return (2 * numerator + denominator) // (2 * denominator)


def coerce_target_status(value: Union[AttendanceStatus, str, None]) -> AttendanceStatus:
    """Turn a status or wire token into a valid transition target."""

    if isinstance(value, AttendanceStatus):
        status = value
    else:
        try:
            status = AttendanceStatus(value)
        except ValueError:
            allowed = ", ".join(s.value for s in AttendanceStatus if s in VALID_TARGETS)
            raise InvalidStatusError(f"Invalid status value. Must be one of: {allowed}")

    if status not in VALID_TARGETS:
        raise InvalidStatusError(f"'{status.value}' is an initial state and cannot be chosen")
    return status


def recompute_attendance_percentage(absent_count: int, permission_count: int) -> int:
    present_days = TOTAL_DAYS - absent_count - permission_count
    percentage = round_half_up(present_days * 100, TOTAL_DAYS)
    return max(0, min(100, percentage))


def apply_status_transition(
    record: AttendanceRecord,
    new_status: Union[AttendanceStatus, str],
    current_clock_time: ClockValue,
) -> AttendanceRecord:
    target = coerce_target_status(new_status)

    counters = {
        "late_count": record.late_count,
        "absent_count": record.absent_count,
        "permission_count": record.permission_count,
    }

    prior_field = COUNTER_FIELD[record.status]
    if prior_field:
        counters[prior_field] = max(0, counters[prior_field] - 1)

    target_field = COUNTER_FIELD[target]
    if target_field:
        counters[target_field] += 1

    marked = format_clock(current_clock_time) if target in TIMED_STATUSES else NOT_RECORDED

    return replace(
        record,
        status=target,
        last_marked_time=marked,
        attendance_percentage=recompute_attendance_percentage(
            counters["absent_count"], counters["permission_count"]
        ),
        **counters,
    )


def compute_system_stats(records: Iterable[AttendanceRecord]) -> AttendanceStats:
    total = present = late = absent = permission = 0
    for r in records:
        total += 1
        if r.status is AttendanceStatus.PRESENT:
            present += 1
        elif r.status is AttendanceStatus.LATE:
            late += 1
        elif r.status is AttendanceStatus.ABSENT:
            absent += 1
        elif r.status in PERMISSION_STATUSES:
            permission += 1

    rate = round_half_up((present + late) * 1000, total) / 10 if total else 0.0
    return AttendanceStats(
        total_students=total,
        present=present,
        late=late,
        absent=absent,
        permission=permission,
        unmarked=total - present - late - absent - permission,
        attendance_rate=rate,
    )
