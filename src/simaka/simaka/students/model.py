from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import GraduationStatus, PromotionStatus, StudentType


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student with embedded attendance state."""

    student_id: int
    nis: str
    name: str
    class_name: str
    attendance: AttendanceRecord
    photo: str = ""
    student_type: StudentType = StudentType.EXISTING
    violations: int = 0
    achievements: int = 0
    promotion_status: PromotionStatus = PromotionStatus.UNDECIDED
    graduation_status: GraduationStatus = GraduationStatus.NOT_GRADUATED
    previous_class: Optional[str] = None
    next_class: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.student_id,
            "nis": self.nis,
            "name": self.name,
            "class": self.class_name,
            "photo": self.photo,
        }
        out.update(self.attendance.to_dict())
        out.update(
            {
                "type": self.student_type.value,
                "violations": self.violations,
                "achievements": self.achievements,
                "promotionStatus": self.promotion_status.value,
                "graduationStatus": self.graduation_status.value,
                "previousClass": self.previous_class,
                "nextClass": self.next_class,
            }
        )
        return out


@dataclass(frozen=True)
class StudentFilter:
    class_name: Optional[str] = None
    search: Optional[str] = None
    student_type: Optional[StudentType] = None
    promotion_status: Optional[PromotionStatus] = None


@dataclass(frozen=True)
class NewStudent:
    student_id: int
    nis: str
    name: str
    class_name: str
    photo: str
    student_type: StudentType


@dataclass(frozen=True)
class RecordEntry:
    """A violation or achievement line shown on the student detail page."""

    entry_id: int
    date: str
    type: str
    description: str
    points: int

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "date": self.date,
            "type": self.type,
            "description": self.description,
            "points": self.points,
        }


@dataclass(frozen=True)
class StudentCategories:
    total_students: int
    new_students: int
    transfer_students: int
    existing_students: int

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "newStudents": self.new_students,
            "transferStudents": self.transfer_students,
            "existingStudents": self.existing_students,
        }
