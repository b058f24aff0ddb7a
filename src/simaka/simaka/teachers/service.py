from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import initials, require_clock, require_max_length, require_non_empty, require_positive_int
from ..core.constants import CLASS_MAX_LENGTH, DAY_MAX_LENGTH, DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH, ROOM_MAX_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from .model import ScheduleItem, Teacher
from .repository import TeacherRepository

logger = logging.getLogger(__name__)


def _millis() -> int:
    return int(now_local().timestamp() * 1000)


def parse_schedule(raw: Any, *, id_source: Callable[[], int] = _millis) -> tuple[ScheduleItem, ...]:
    """Validate a JSON schedule payload into ScheduleItems.

    Items sent without an id get `id_source() + index`, the same scheme the
    front end uses for rows it creates locally.
    """

    if not isinstance(raw, list):
        raise ValidationError("Schedule data must be an array")

    base: Optional[int] = None
    items: list[ScheduleItem] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValidationError(f"Schedule item {index + 1} must be an object")

        if entry.get("id"):
            item_id = require_positive_int(entry["id"], "schedule item id")
        else:
            if base is None:
                base = id_source()
            item_id = base + index

        start = require_clock(entry.get("startTime"), "startTime")
        end = require_clock(entry.get("endTime"), "endTime")
        if start >= end:
            raise ValidationError(f"Schedule item {index + 1}: startTime must be before endTime")

        description = entry.get("description") or ""
        if not isinstance(description, str):
            raise ValidationError("description must be a string")

        items.append(
            ScheduleItem(
                item_id=item_id,
                day=require_non_empty(entry.get("day"), "day", max_len=DAY_MAX_LENGTH),
                start_time=start,
                end_time=end,
                class_name=require_non_empty(entry.get("class"), "class", max_len=CLASS_MAX_LENGTH),
                room=require_non_empty(entry.get("room"), "room", max_len=ROOM_MAX_LENGTH),
                description=require_max_length(description.strip(), "description", DESCRIPTION_MAX_LENGTH),
            )
        )

    ids = [i.item_id for i in items]
    if len(ids) != len(set(ids)):
        raise ValidationError("Schedule item ids must be unique")
    return tuple(items)


class TeacherService:
    """Use cases: teacher roster and weekly teaching schedule."""

    def __init__(self, teachers: TeacherRepository, *, id_source: Callable[[], int] = _millis):
        self._teachers = teachers
        self._id_source = id_source

    def list_teachers(self) -> Sequence[Teacher]:
        return self._teachers.list_all()

    def get(self, teacher_id: Any) -> Teacher:
        tid = require_positive_int(teacher_id, "teacher ID")
        teacher = self._teachers.get_by_id(tid)
        if not teacher:
            raise NotFoundError(f"Teacher with ID {tid} not found")
        return teacher

    def create(self, *, name: Any, subject: Any, schedule: Any = None) -> Teacher:
        name = require_non_empty(name, "Name", max_len=NAME_MAX_LENGTH)
        subject = require_non_empty(subject, "Subject", max_len=NAME_MAX_LENGTH)
        items = parse_schedule(schedule if schedule is not None else [], id_source=self._id_source)

        teacher = self._teachers.create(
            Teacher(
                teacher_id=self._teachers.next_id(),
                name=name,
                subject=subject,
                photo=initials(name),
                schedule=items,
            )
        )
        logger.info("Created teacher %s (%s)", teacher.teacher_id, teacher.subject)
        return teacher

    def remove(self, teacher_id: Any) -> None:
        tid = require_positive_int(teacher_id, "teacher ID")
        if not self._teachers.delete_by_id(tid):
            raise NotFoundError(f"Teacher with ID {tid} not found")
        logger.info("Removed teacher %s", tid)

    def get_schedule(self, teacher_id: Any) -> tuple[ScheduleItem, ...]:
        return self.get(teacher_id).schedule

    def replace_schedule(self, teacher_id: Any, raw_items: Any) -> Teacher:
        tid = require_positive_int(teacher_id, "teacher ID")
        items = parse_schedule(raw_items, id_source=self._id_source)
        if not self._teachers.replace_schedule(tid, items):
            raise NotFoundError(f"Teacher with ID {tid} not found")
        logger.info("Teacher %s schedule replaced (%d items)", tid, len(items))
        return self.get(tid)
