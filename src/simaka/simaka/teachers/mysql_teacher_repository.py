from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ScheduleItem, Teacher
from .repository import TeacherRepository


def _item_from_row(r: dict) -> ScheduleItem:
    return ScheduleItem(
        item_id=int(r["item_id"]),
        day=r["day"],
        start_time=str(r["start_time"])[:5],
        end_time=str(r["end_time"])[:5],
        class_name=r["class_name"],
        room=r["room"],
        description=r.get("description") or "",
    )


def _insert_items(cur, teacher_id: int, items: Sequence[ScheduleItem]) -> None:
    for position, item in enumerate(items):
        cur.execute(
            """
            INSERT INTO teacher_schedule_items(
                item_id, teacher_id, position, day, start_time, end_time, class_name, room, description
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                int(item.item_id),
                int(teacher_id),
                position,
                item.day,
                item.start_time,
                item.end_time,
                item.class_name,
                item.room,
                item.description,
            ),
        )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_schedules(self, cur, teacher_ids: Sequence[int]) -> dict[int, list[ScheduleItem]]:
        by_teacher: dict[int, list[ScheduleItem]] = {tid: [] for tid in teacher_ids}
        if not teacher_ids:
            return by_teacher
        placeholders = ",".join(["%s"] * len(teacher_ids))
        cur.execute(
            f"""
            SELECT item_id, teacher_id, day, start_time, end_time, class_name, room, description
            FROM teacher_schedule_items
            WHERE teacher_id IN ({placeholders})
            ORDER BY teacher_id, position
            """,
            tuple(teacher_ids),
        )
        for r in fetchall(cur):
            by_teacher[int(r["teacher_id"])].append(_item_from_row(r))
        return by_teacher

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id, name, subject, photo FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            r = fetchone(cur)
            if not r:
                return None
            items = self._load_schedules(cur, [int(r["teacher_id"])])[int(r["teacher_id"])]
            return Teacher(
                teacher_id=int(r["teacher_id"]),
                name=r["name"],
                subject=r["subject"],
                photo=r.get("photo") or "",
                schedule=tuple(items),
            )

    def list_all(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id, name, subject, photo FROM teachers ORDER BY teacher_id")
            rows = fetchall(cur)
            schedules = self._load_schedules(cur, [int(r["teacher_id"]) for r in rows])
            return [
                Teacher(
                    teacher_id=int(r["teacher_id"]),
                    name=r["name"],
                    subject=r["subject"],
                    photo=r.get("photo") or "",
                    schedule=tuple(schedules[int(r["teacher_id"])]),
                )
                for r in rows
            ]

    def next_id(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(MAX(teacher_id), 0) + 1 AS next_id FROM teachers")
            return int(fetchone(cur)["next_id"])

    def create(self, teacher: Teacher) -> Teacher:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO teachers(teacher_id, name, subject, photo) VALUES(%s,%s,%s,%s)",
                (int(teacher.teacher_id), teacher.name, teacher.subject, teacher.photo),
            )
            _insert_items(cur, teacher.teacher_id, teacher.schedule)
        return teacher

    def delete_by_id(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            return cur.rowcount > 0

    def replace_schedule(self, teacher_id: int, items: Sequence[ScheduleItem]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id FROM teachers WHERE teacher_id=%s FOR UPDATE", (int(teacher_id),))
            if not fetchone(cur):
                return False
            cur.execute("DELETE FROM teacher_schedule_items WHERE teacher_id=%s", (int(teacher_id),))
            _insert_items(cur, teacher_id, items)
            return True
