from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.mysql_attendance_repository import record_from_row
from ..core.constants import NOT_RECORDED
from ..core.enums import AttendanceStatus, GraduationStatus, PromotionStatus, StudentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern
from .model import NewStudent, Student, StudentFilter
from .repository import StudentRepository

STUDENT_COLUMNS = """
    student_id, nis, name, class_name, photo,
    status, time, late_count, absent_count, permission_count, attendance, version,
    student_type, violations, achievements, promotion_status, graduation_status,
    previous_class, next_class
"""


def student_from_row(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        nis=r["nis"],
        name=r["name"],
        class_name=r["class_name"],
        photo=r.get("photo") or "",
        attendance=record_from_row(r),
        student_type=StudentType(r.get("student_type") or StudentType.EXISTING.value),
        violations=int(r.get("violations") or 0),
        achievements=int(r.get("achievements") or 0),
        promotion_status=PromotionStatus(r.get("promotion_status") or PromotionStatus.UNDECIDED.value),
        graduation_status=GraduationStatus(r.get("graduation_status") or GraduationStatus.NOT_GRADUATED.value),
        previous_class=r.get("previous_class"),
        next_class=r.get("next_class"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {STUDENT_COLUMNS} FROM students WHERE {where}", params)
            r = fetchone(cur)
            return student_from_row(r) if r else None

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._get_one("student_id=%s", (int(student_id),))

    def get_by_nis(self, nis: str) -> Optional[Student]:
        return self._get_one("nis=%s", (nis,))

    def find(self, flt: StudentFilter) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []
        if flt.class_name:
            clauses.append("class_name=%s")
            params.append(flt.class_name)
        if flt.search:
            clauses.append("(name LIKE %s OR nis LIKE %s)")
            pattern = like_pattern(flt.search)
            params.extend([pattern, pattern])
        if flt.student_type is not None:
            clauses.append("student_type=%s")
            params.append(flt.student_type.value)
        if flt.promotion_status is not None:
            clauses.append("promotion_status=%s")
            params.append(flt.promotion_status.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {STUDENT_COLUMNS} FROM students {where} ORDER BY student_id", tuple(params))
            return [student_from_row(r) for r in fetchall(cur)]

    def next_id(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(MAX(student_id), 0) + 1 AS next_id FROM students")
            return int(fetchone(cur)["next_id"])

    def create(self, new: NewStudent, *, attendance_percentage: int) -> Student:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(student_id, nis, name, class_name, photo, status, time, attendance, student_type)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.student_id,
                    new.nis,
                    new.name,
                    new.class_name,
                    new.photo,
                    AttendanceStatus.UNSET.value,
                    NOT_RECORDED,
                    attendance_percentage,
                    new.student_type.value,
                ),
            )
        created = self.get_by_id(new.student_id)
        if created is None:
            raise RuntimeError(f"Student {new.student_id} vanished after insert")
        return created

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0

    def update_class(self, student_id: int, class_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET class_name=%s WHERE student_id=%s", (class_name, int(student_id)))
            return cur.rowcount > 0

    def update_promotion(
        self,
        student_id: int,
        *,
        promotion_status: PromotionStatus,
        graduation_status: GraduationStatus,
        previous_class: str,
        next_class: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET promotion_status=%s, graduation_status=%s, previous_class=%s, next_class=%s
                WHERE student_id=%s
                """,
                (promotion_status.value, graduation_status.value, previous_class, next_class, int(student_id)),
            )
            return cur.rowcount > 0

    def count_by_type(self) -> dict[StudentType, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_type, COUNT(*) AS n FROM students GROUP BY student_type")
            counts = {t: 0 for t in StudentType}
            for r in fetchall(cur):
                counts[StudentType(r["student_type"])] = int(r["n"])
            return counts
