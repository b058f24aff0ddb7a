from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_student_id(self, student_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        """Persist `record` if the stored version still equals `record.version`.

        Returns the record with its new version; raises ConflictError when
        another writer got there first.
        """

        raise NotImplementedError

    def reset_daily_status(self) -> int:
        """Set every student back to the unmarked status; counters are kept."""

        raise NotImplementedError
