from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..attendance.ledger import recompute_attendance_percentage
from ..common.validators import initials, require_choice, require_max_length, require_non_empty, require_positive_int
from ..core.constants import CLASS_MAX_LENGTH, NAME_MAX_LENGTH, NIS_MAX_LENGTH
from ..core.enums import GraduationStatus, PromotionStatus, StudentType
from ..core.exceptions import NotFoundError, ValidationError
from .model import NewStudent, RecordEntry, Student, StudentCategories, StudentFilter
from .repository import StudentRepository

logger = logging.getLogger(__name__)

# Sample catalogue shown on the detail page, truncated to the student's counts.
SAMPLE_VIOLATIONS = (
    RecordEntry(1, "2025-10-15", "Keterlambatan", "Terlambat masuk kelas lebih dari 15 menit", 2),
    RecordEntry(2, "2025-09-22", "Pelanggaran Seragam", "Tidak memakai dasi sekolah", 1),
    RecordEntry(3, "2025-08-05", "Perilaku", "Bertindak tidak sopan terhadap guru", 3),
)
SAMPLE_ACHIEVEMENTS = (
    RecordEntry(1, "2025-10-05", "Akademik", "Peringkat 1 ujian matematika", 10),
    RecordEntry(2, "2025-09-18", "Olahraga", "Juara 2 lomba renang antar kelas", 8),
    RecordEntry(3, "2025-08-30", "Sikap", "Siswa teladan bulan Agustus", 5),
    RecordEntry(4, "2025-07-15", "Kesenian", "Juara 1 lomba menyanyi tingkat sekolah", 7),
)


@dataclass(frozen=True)
class StudentDetails:
    student: Student
    recent_violations: tuple[RecordEntry, ...]
    recent_achievements: tuple[RecordEntry, ...]

    def to_dict(self) -> dict:
        out = self.student.to_dict()
        out["recentViolations"] = [v.to_dict() for v in self.recent_violations]
        out["recentAchievements"] = [a.to_dict() for a in self.recent_achievements]
        return out


def build_filter(
    *,
    class_name: Optional[str] = None,
    search: Optional[str] = None,
    student_type: Optional[str] = None,
    promotion_status: Optional[str] = None,
) -> StudentFilter:
    """Normalize query-string filters; "all" and blanks mean no filter."""

    def _active(value: Optional[str]) -> Optional[str]:
        value = (value or "").strip()
        return value if value and value != "all" else None

    type_s = _active(student_type)
    promo_s = _active(promotion_status)
    return StudentFilter(
        class_name=_active(class_name),
        search=(search or "").strip() or None,
        student_type=require_choice(type_s, StudentType, "type filter") if type_s else None,
        promotion_status=require_choice(promo_s, PromotionStatus, "promotion status filter") if promo_s else None,
    )


class StudentService:
    """Use cases: roster management, class changes, promotion/graduation."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, flt: StudentFilter = StudentFilter()) -> Sequence[Student]:
        return self._students.find(flt)

    def get(self, student_id: Any) -> Student:
        sid = require_positive_int(student_id, "student ID")
        student = self._students.get_by_id(sid)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def enroll(self, *, nis: Any, name: Any, class_name: Any, student_type: Any = None) -> Student:
        try:
            nis = require_non_empty(nis, "NIS")
            name = require_non_empty(name, "Name")
            class_name = require_non_empty(class_name, "Class")
        except ValidationError:
            raise ValidationError("NIS, name, and class are required")
        require_max_length(nis, "NIS", NIS_MAX_LENGTH)
        require_max_length(name, "Name", NAME_MAX_LENGTH)
        require_max_length(class_name, "Class", CLASS_MAX_LENGTH)

        stype = require_choice(student_type, StudentType, "student type") if student_type else StudentType.NEW

        if self._students.get_by_nis(nis):
            raise ValidationError(f"A student with NIS {nis} already exists")

        new = NewStudent(
            student_id=self._students.next_id(),
            nis=nis,
            name=name,
            class_name=class_name,
            photo=initials(name),
            student_type=stype,
        )
        student = self._students.create(new, attendance_percentage=recompute_attendance_percentage(0, 0))
        logger.info("Enrolled student %s (%s) in %s", student.student_id, student.nis, student.class_name)
        return student

    def get_details(self, student_id: Any) -> StudentDetails:
        return self._details(self.get(student_id))

    def list_details(self) -> list[StudentDetails]:
        return [self._details(s) for s in self._students.find(StudentFilter())]

    def list_violations(self) -> Sequence[Student]:
        return self._students.find(StudentFilter())

    @staticmethod
    def _details(student: Student) -> StudentDetails:
        return StudentDetails(
            student=student,
            recent_violations=SAMPLE_VIOLATIONS[: max(student.violations, 0)],
            recent_achievements=SAMPLE_ACHIEVEMENTS[: max(student.achievements, 0)],
        )

    def remove(self, student_id: Any) -> None:
        sid = require_positive_int(student_id, "student ID")
        if not self._students.delete_by_id(sid):
            raise NotFoundError("Student not found")
        logger.info("Removed student %s", sid)

    def change_class(self, student_id: Any, class_name: Any) -> Student:
        if not student_id or not class_name:
            raise ValidationError("Student ID and class are required")
        student = self.get(student_id)
        class_name = require_non_empty(class_name, "Class", max_len=CLASS_MAX_LENGTH)
        self._students.update_class(student.student_id, class_name)
        return self.get(student.student_id)

    def set_promotion(self, student_id: Any, promotion_status: Any, next_class: Any = None) -> Student:
        if not student_id or not promotion_status:
            raise ValidationError("Student ID and promotion status are required")
        sid = require_positive_int(student_id, "student ID")
        status = require_choice(promotion_status, PromotionStatus, "promotion status")
        if next_class is not None and not isinstance(next_class, str):
            raise ValidationError("Next class must be a string.")
        if next_class:
            require_max_length(next_class.strip(), "Next class", CLASS_MAX_LENGTH)

        student = self._students.get_by_id(sid)
        if not student:
            raise NotFoundError("Student not found")

        graduation = GraduationStatus.GRADUATED if status is PromotionStatus.GRADUATED else student.graduation_status
        self._students.update_promotion(
            sid,
            promotion_status=status,
            graduation_status=graduation,
            previous_class=student.class_name,
            next_class=(next_class or "").strip() or student.class_name,
        )
        logger.info("Student %s promotion status -> %s", sid, status.value)
        return self.get(sid)

    def categories(self) -> StudentCategories:
        counts = self._students.count_by_type()
        return StudentCategories(
            total_students=sum(counts.values()),
            new_students=counts.get(StudentType.NEW, 0),
            transfer_students=counts.get(StudentType.TRANSFER, 0),
            existing_students=counts.get(StudentType.EXISTING, 0),
        )
