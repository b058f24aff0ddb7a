from __future__ import annotations

from dataclasses import asdict, dataclass

from ..core.constants import DEFAULT_SETTINGS


@dataclass(frozen=True)
class SchoolSettings:
    """The single school-wide settings row."""

    school_name: str
    academic_year: str
    semester: str
    start_time: str
    end_time: str
    notifications: bool
    language: str
    theme: str

    @classmethod
    def defaults(cls) -> "SchoolSettings":
        return cls(**DEFAULT_SETTINGS)

    def to_dict(self) -> dict:
        return asdict(self)
