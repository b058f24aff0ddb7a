from __future__ import annotations

import itertools
from datetime import datetime, time

import pytest

from src.simaka.simaka.attendance.ledger import (
    apply_status_transition,
    compute_system_stats,
    recompute_attendance_percentage,
)
from src.simaka.simaka.attendance.model import AttendanceRecord
from src.simaka.simaka.core.enums import AttendanceStatus
from src.simaka.simaka.core.exceptions import InvalidStatusError, ValidationError

TARGETS = [s for s in AttendanceStatus if s is not AttendanceStatus.UNSET]


def test_fresh_record_marked_late_records_time_and_counter():
    r = AttendanceRecord(student_id=1)

    out = apply_status_transition(r, AttendanceStatus.LATE, "08:15")

    assert out.status is AttendanceStatus.LATE
    assert (out.late_count, out.absent_count, out.permission_count) == (1, 0, 0)
    assert out.attendance_percentage == 100
    assert out.last_marked_time == "08:15"


def test_late_to_absent_moves_the_counter():
    r = AttendanceRecord(student_id=1, status=AttendanceStatus.LATE, late_count=1, last_marked_time="08:15")

    out = apply_status_transition(r, AttendanceStatus.ABSENT, "09:00")

    assert out.late_count == 0
    assert out.absent_count == 1
    assert out.attendance_percentage == 99
    assert out.last_marked_time == "-"


def test_sick_counts_as_permission():
    r = AttendanceRecord(
        student_id=1,
        status=AttendanceStatus.PRESENT,
        absent_count=3,
        permission_count=2,
        attendance_percentage=95,
    )

    out = apply_status_transition(r, AttendanceStatus.EXCUSED_SICK, "07:00")

    assert out.permission_count == 3
    assert out.absent_count == 3
    assert out.attendance_percentage == 94


def test_unset_is_not_a_valid_target():
    r = AttendanceRecord(student_id=1, status=AttendanceStatus.LATE, late_count=1)

    with pytest.raises(InvalidStatusError):
        apply_status_transition(r, AttendanceStatus.UNSET, "08:00")
    with pytest.raises(InvalidStatusError):
        apply_status_transition(r, "belum-diisi", "08:00")

    assert r.status is AttendanceStatus.LATE
    assert r.late_count == 1


def test_unknown_token_is_rejected():
    with pytest.raises(InvalidStatusError):
        apply_status_transition(AttendanceRecord(student_id=1), "present", "08:00")


def test_wire_tokens_are_accepted():
    out = apply_status_transition(AttendanceRecord(student_id=1), "izin", "08:00")
    assert out.status is AttendanceStatus.EXCUSED_PERMISSION
    assert out.permission_count == 1


def test_clock_values_format_as_hh_mm():
    r = AttendanceRecord(student_id=1)

    assert apply_status_transition(r, AttendanceStatus.PRESENT, datetime(2025, 10, 20, 7, 5, 59)).last_marked_time == "07:05"
    assert apply_status_transition(r, AttendanceStatus.PRESENT, time(13, 40)).last_marked_time == "13:40"


def test_clock_strings_are_normalized_to_hh_mm():
    r = AttendanceRecord(student_id=1)

    assert apply_status_transition(r, AttendanceStatus.LATE, "07:05:59").last_marked_time == "07:05"
    assert apply_status_transition(r, AttendanceStatus.LATE, "7:05").last_marked_time == "07:05"


@pytest.mark.parametrize("clock", ["7:05:59 PM", "pagi", "25:00", ""])
def test_unparseable_clock_strings_are_rejected(clock):
    with pytest.raises(ValidationError):
        apply_status_transition(AttendanceRecord(student_id=1), AttendanceStatus.PRESENT, clock)


def test_input_record_is_not_mutated_and_version_is_kept():
    r = AttendanceRecord(student_id=7, version=4)

    out = apply_status_transition(r, AttendanceStatus.ABSENT, "08:00")

    assert r == AttendanceRecord(student_id=7, version=4)
    assert out.version == 4
    assert out.student_id == 7


@pytest.mark.parametrize("status", TARGETS)
def test_reapplying_the_same_status_is_idempotent(status):
    start = AttendanceRecord(student_id=1, late_count=2, absent_count=5, permission_count=1)
    once = apply_status_transition(start, status, "08:00")
    twice = apply_status_transition(once, status, "08:00")

    assert (twice.late_count, twice.absent_count, twice.permission_count) == (
        once.late_count,
        once.absent_count,
        once.permission_count,
    )
    assert twice.attendance_percentage == once.attendance_percentage


def test_counters_stay_non_negative_and_percentage_in_bounds():
    # Every sequence of four transitions from a fresh record.
    for path in itertools.product(TARGETS, repeat=4):
        r = AttendanceRecord(student_id=1)
        for status in path:
            r = apply_status_transition(r, status, "08:00")
            assert r.late_count >= 0
            assert r.absent_count >= 0
            assert r.permission_count >= 0
            assert 0 <= r.attendance_percentage <= 100
            assert r.attendance_percentage == recompute_attendance_percentage(r.absent_count, r.permission_count)


def test_reversal_clamps_at_zero_for_inconsistent_rows():
    # Status says late but the counter was never incremented.
    r = AttendanceRecord(student_id=1, status=AttendanceStatus.LATE, late_count=0)

    out = apply_status_transition(r, AttendanceStatus.PRESENT, "08:00")

    assert out.late_count == 0


def test_present_late_present_restores_counters():
    r = AttendanceRecord(student_id=1, absent_count=2, permission_count=1)
    present = apply_status_transition(r, AttendanceStatus.PRESENT, "07:00")
    late = apply_status_transition(present, AttendanceStatus.LATE, "07:30")
    back = apply_status_transition(late, AttendanceStatus.PRESENT, "07:31")

    assert back.late_count == present.late_count
    assert back.absent_count == 2
    assert back.permission_count == 1


def test_percentage_is_clamped():
    assert recompute_attendance_percentage(0, 0) == 100
    assert recompute_attendance_percentage(60, 50) == 0
    assert recompute_attendance_percentage(1, 0) == 99


def test_system_stats_over_mixed_statuses():
    records = [
        AttendanceRecord(student_id=1, status=AttendanceStatus.PRESENT),
        AttendanceRecord(student_id=2, status=AttendanceStatus.LATE),
        AttendanceRecord(student_id=3, status=AttendanceStatus.ABSENT),
        AttendanceRecord(student_id=4, status=AttendanceStatus.EXCUSED_SICK),
    ]

    stats = compute_system_stats(records)

    assert stats.to_dict() == {
        "totalStudents": 4,
        "present": 1,
        "late": 1,
        "absent": 1,
        "permission": 1,
        "unmarked": 0,
        "attendanceRate": 50.0,
    }


def test_system_stats_empty_roster():
    stats = compute_system_stats([])
    assert stats.total_students == 0
    assert stats.attendance_rate == 0


def test_system_stats_rate_rounds_to_one_decimal():
    records = [AttendanceRecord(student_id=i, status=AttendanceStatus.PRESENT) for i in range(2)]
    records.append(AttendanceRecord(student_id=3, status=AttendanceStatus.ABSENT))

    # 2/3 -> 66.666... -> 66.7
    assert compute_system_stats(records).attendance_rate == 66.7


def test_system_stats_buckets_always_sum_to_total():
    for statuses in itertools.product(list(AttendanceStatus), repeat=3):
        records = [AttendanceRecord(student_id=i, status=s) for i, s in enumerate(statuses)]
        stats = compute_system_stats(records)
        assert stats.present + stats.late + stats.absent + stats.permission + stats.unmarked == stats.total_students
        if AttendanceStatus.UNSET not in statuses:
            assert stats.present + stats.late + stats.absent + stats.permission == stats.total_students
