from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import NOT_RECORDED, TOTAL_DAYS
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Attendance state of one student: today's status plus lifetime counters.

    `version` belongs to the repository (optimistic concurrency); the ledger
    copies it through untouched.
    """

    student_id: int
    status: AttendanceStatus = AttendanceStatus.UNSET
    last_marked_time: str = NOT_RECORDED
    late_count: int = 0
    absent_count: int = 0
    permission_count: int = 0
    attendance_percentage: int = TOTAL_DAYS
    version: int = 0

    def to_dict(self) -> dict:
        # The front end reads both the short and the *Count keys.
        return {
            "status": self.status.value,
            "time": self.last_marked_time,
            "late": self.late_count,
            "absent": self.absent_count,
            "permission": self.permission_count,
            "lateCount": self.late_count,
            "absentCount": self.absent_count,
            "permissionCount": self.permission_count,
            "attendance": self.attendance_percentage,
        }


@dataclass(frozen=True)
class AttendanceStats:
    total_students: int
    present: int
    late: int
    absent: int
    permission: int
    unmarked: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "permission": self.permission,
            "unmarked": self.unmarked,
            "attendanceRate": self.attendance_rate,
        }
