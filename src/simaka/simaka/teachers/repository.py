from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ScheduleItem, Teacher


class TeacherRepository(Protocol):
    """Repository interface for teachers and their weekly schedule.

    A teacher is always returned together with its schedule items, in the
    order they were saved.
    """

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def next_id(self) -> int:
        raise NotImplementedError

    def create(self, teacher: Teacher) -> Teacher:
        raise NotImplementedError

    def delete_by_id(self, teacher_id: int) -> bool:
        raise NotImplementedError

    def replace_schedule(self, teacher_id: int, items: Sequence[ScheduleItem]) -> bool:
        """Swap the whole schedule in one transaction; False when the teacher is unknown."""

        raise NotImplementedError
