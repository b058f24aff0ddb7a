from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.datetime_utils import ClockValue, now_local
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_ATTENDANCE_MAX_RETRIES
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..students.model import Student, StudentCategories
from ..students.service import StudentService, build_filter
from .ledger import apply_status_transition, coerce_target_status, compute_system_stats
from .model import AttendanceStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceUpdate:
    student: Student
    stats: AttendanceStats
    categories: StudentCategories


@dataclass(frozen=True)
class AttendanceListing:
    records: Sequence[Student]
    stats: AttendanceStats


class AttendanceService:
    """Use case: mark a student's attendance for today.

    Each attempt is fetch -> ledger transition -> conditional save. A save
    that loses a race is retried from a fresh read, so no counter update is
    ever computed from a stale record.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentService,
        *,
        max_retries: int = DEFAULT_ATTENDANCE_MAX_RETRIES,
    ):
        self._attendance = attendance
        self._students = students
        self._max_retries = max(1, int(max_retries))

    def update_status(self, student_id: Any, new_status: Any, *, now: Optional[ClockValue] = None) -> AttendanceUpdate:
        if not student_id or not new_status:
            raise ValidationError("Student ID and new status are required")
        sid = require_positive_int(student_id, "student ID")
        target = coerce_target_status(new_status)
        clock = now or now_local()

        for attempt in range(1, self._max_retries + 1):
            record = self._attendance.get_by_student_id(sid)
            if record is None:
                raise NotFoundError("Student not found")

            updated = apply_status_transition(record, target, clock)
            try:
                self._attendance.save(updated)
                break
            except ConflictError:
                if attempt == self._max_retries:
                    logger.warning("Giving up on student %s after %d conflicting writes", sid, attempt)
                    raise
                logger.warning("Concurrent update on student %s, retrying (%d/%d)", sid, attempt, self._max_retries)

        logger.info("Student %s marked %s", sid, target.value)
        return AttendanceUpdate(
            student=self._students.get(sid),
            stats=self.system_stats(),
            categories=self.student_categories(),
        )

    def list_records(self, *, class_name: Optional[str] = None, search: Optional[str] = None) -> AttendanceListing:
        flt = build_filter(class_name=class_name, search=search)
        return AttendanceListing(records=self._students.list_students(flt), stats=self.system_stats())

    def system_stats(self) -> AttendanceStats:
        return compute_system_stats(self._attendance.list_all())

    def student_categories(self) -> StudentCategories:
        return self._students.categories()

    def start_new_day(self) -> int:
        count = self._attendance.reset_daily_status()
        logger.info("Daily attendance reset for %d students", count)
        return count
