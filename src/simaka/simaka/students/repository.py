from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import GraduationStatus, PromotionStatus, StudentType
from .model import NewStudent, Student, StudentFilter


class StudentRepository(Protocol):
    """Repository interface for students.

    Note (DIP): services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_nis(self, nis: str) -> Optional[Student]:
        raise NotImplementedError

    def find(self, flt: StudentFilter) -> Sequence[Student]:
        raise NotImplementedError

    def next_id(self) -> int:
        raise NotImplementedError

    def create(self, new: NewStudent, *, attendance_percentage: int) -> Student:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError

    def update_class(self, student_id: int, class_name: str) -> bool:
        raise NotImplementedError

    def update_promotion(
        self,
        student_id: int,
        *,
        promotion_status: PromotionStatus,
        graduation_status: GraduationStatus,
        previous_class: str,
        next_class: str,
    ) -> bool:
        raise NotImplementedError

    def count_by_type(self) -> dict[StudentType, int]:
        raise NotImplementedError
