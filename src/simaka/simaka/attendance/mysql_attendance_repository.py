from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.constants import NOT_RECORDED
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

ATTENDANCE_COLUMNS = "student_id, status, time, late_count, absent_count, permission_count, attendance, version"


def record_from_row(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        student_id=int(r["student_id"]),
        status=AttendanceStatus(r["status"]),
        last_marked_time=r.get("time") or NOT_RECORDED,
        late_count=int(r.get("late_count") or 0),
        absent_count=int(r.get("absent_count") or 0),
        permission_count=int(r.get("permission_count") or 0),
        attendance_percentage=int(r.get("attendance") or 0),
        version=int(r.get("version") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_student_id(self, student_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {ATTENDANCE_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return record_from_row(r) if r else None

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {ATTENDANCE_COLUMNS} FROM students ORDER BY student_id")
            return [record_from_row(r) for r in fetchall(cur)]

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET status=%s, time=%s, late_count=%s, absent_count=%s, permission_count=%s,
                    attendance=%s, version=version+1
                WHERE student_id=%s AND version=%s
                """,
                (
                    record.status.value,
                    record.last_marked_time,
                    record.late_count,
                    record.absent_count,
                    record.permission_count,
                    record.attendance_percentage,
                    record.student_id,
                    record.version,
                ),
            )
            if cur.rowcount != 1:
                raise ConflictError(f"Attendance of student {record.student_id} was changed concurrently")
        return replace(record, version=record.version + 1)

    def reset_daily_status(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET status=%s, time=%s, version=version+1 WHERE status<>%s",
                (AttendanceStatus.UNSET.value, NOT_RECORDED, AttendanceStatus.UNSET.value),
            )
            return int(cur.rowcount)
