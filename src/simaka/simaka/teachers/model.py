from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScheduleItem:
    """One weekly teaching slot."""

    item_id: int
    day: str
    start_time: str
    end_time: str
    class_name: str
    room: str
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "day": self.day,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "class": self.class_name,
            "room": self.room,
            "description": self.description,
        }


@dataclass(frozen=True)
class Teacher:
    teacher_id: int
    name: str
    subject: str
    photo: str = ""
    schedule: tuple[ScheduleItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.teacher_id,
            "name": self.name,
            "subject": self.subject,
            "photo": self.photo,
            "schedule": [item.to_dict() for item in self.schedule],
        }
