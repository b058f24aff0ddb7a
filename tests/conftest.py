from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Optional, Sequence

import pytest

from src.simaka.simaka.attendance.model import AttendanceRecord
from src.simaka.simaka.container import Container, wire_services
from src.simaka.simaka.core.constants import NOT_RECORDED
from src.simaka.simaka.core.enums import AttendanceStatus, GraduationStatus, PromotionStatus, Role, StudentType
from src.simaka.simaka.core.exceptions import ConflictError
from src.simaka.simaka.health.service import HealthService
from src.simaka.simaka.settings.model import SchoolSettings
from src.simaka.simaka.students.model import NewStudent, Student, StudentFilter
from src.simaka.simaka.teachers.model import ScheduleItem, Teacher
from src.simaka.simaka.users.model import User


class InMemoryStudents:
    """Students keyed by id; the attendance fake shares this dict."""

    def __init__(self, students: Sequence[Student] = ()):
        self.rows: dict[int, Student] = {s.student_id: s for s in students}

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.rows.get(int(student_id))

    def get_by_nis(self, nis: str) -> Optional[Student]:
        return next((s for s in self.rows.values() if s.nis == nis), None)

    def find(self, flt: StudentFilter) -> Sequence[Student]:
        out = []
        for s in sorted(self.rows.values(), key=lambda s: s.student_id):
            if flt.class_name and s.class_name != flt.class_name:
                continue
            if flt.search:
                term = flt.search.lower()
                if term not in s.name.lower() and term not in s.nis.lower():
                    continue
            if flt.student_type is not None and s.student_type is not flt.student_type:
                continue
            if flt.promotion_status is not None and s.promotion_status is not flt.promotion_status:
                continue
            out.append(s)
        return out

    def next_id(self) -> int:
        return max(self.rows, default=0) + 1

    def create(self, new: NewStudent, *, attendance_percentage: int) -> Student:
        student = Student(
            student_id=new.student_id,
            nis=new.nis,
            name=new.name,
            class_name=new.class_name,
            photo=new.photo,
            student_type=new.student_type,
            attendance=AttendanceRecord(student_id=new.student_id, attendance_percentage=attendance_percentage),
        )
        self.rows[student.student_id] = student
        return student

    def delete_by_id(self, student_id: int) -> bool:
        return self.rows.pop(int(student_id), None) is not None

    def update_class(self, student_id: int, class_name: str) -> bool:
        s = self.rows.get(int(student_id))
        if not s:
            return False
        self.rows[s.student_id] = dataclasses.replace(s, class_name=class_name)
        return True

    def update_promotion(
        self,
        student_id: int,
        *,
        promotion_status: PromotionStatus,
        graduation_status: GraduationStatus,
        previous_class: str,
        next_class: str,
    ) -> bool:
        s = self.rows.get(int(student_id))
        if not s:
            return False
        self.rows[s.student_id] = dataclasses.replace(
            s,
            promotion_status=promotion_status,
            graduation_status=graduation_status,
            previous_class=previous_class,
            next_class=next_class,
        )
        return True

    def count_by_type(self) -> dict[StudentType, int]:
        counts = {t: 0 for t in StudentType}
        for s in self.rows.values():
            counts[s.student_type] += 1
        return counts


class InMemoryAttendance:
    """Attendance view over InMemoryStudents with a version check on save."""

    def __init__(self, students: InMemoryStudents):
        self._students = students
        self.saves = 0

    def get_by_student_id(self, student_id: int) -> Optional[AttendanceRecord]:
        s = self._students.rows.get(int(student_id))
        return s.attendance if s else None

    def list_all(self) -> Sequence[AttendanceRecord]:
        return [s.attendance for s in sorted(self._students.rows.values(), key=lambda s: s.student_id)]

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        s = self._students.rows.get(record.student_id)
        if s is None or s.attendance.version != record.version:
            raise ConflictError(f"Student {record.student_id} was modified concurrently")
        stored = dataclasses.replace(record, version=record.version + 1)
        self._students.rows[s.student_id] = dataclasses.replace(s, attendance=stored)
        self.saves += 1
        return stored

    def reset_daily_status(self) -> int:
        count = 0
        for sid, s in list(self._students.rows.items()):
            if s.attendance.status is AttendanceStatus.UNSET:
                continue
            attendance = dataclasses.replace(
                s.attendance,
                status=AttendanceStatus.UNSET,
                last_marked_time=NOT_RECORDED,
                version=s.attendance.version + 1,
            )
            self._students.rows[sid] = dataclasses.replace(s, attendance=attendance)
            count += 1
        return count


class InMemoryTeachers:
    def __init__(self, teachers: Sequence[Teacher] = ()):
        self.rows: dict[int, Teacher] = {t.teacher_id: t for t in teachers}

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self.rows.get(int(teacher_id))

    def list_all(self) -> Sequence[Teacher]:
        return [self.rows[k] for k in sorted(self.rows)]

    def next_id(self) -> int:
        return max(self.rows, default=0) + 1

    def create(self, teacher: Teacher) -> Teacher:
        self.rows[teacher.teacher_id] = teacher
        return teacher

    def delete_by_id(self, teacher_id: int) -> bool:
        return self.rows.pop(int(teacher_id), None) is not None

    def replace_schedule(self, teacher_id: int, items: Sequence[ScheduleItem]) -> bool:
        t = self.rows.get(int(teacher_id))
        if not t:
            return False
        self.rows[t.teacher_id] = dataclasses.replace(t, schedule=tuple(items))
        return True


class InMemorySettings:
    def __init__(self, settings: Optional[SchoolSettings] = None):
        self.row = settings

    def get(self) -> Optional[SchoolSettings]:
        return self.row

    def save(self, settings: SchoolSettings) -> SchoolSettings:
        self.row = settings
        return settings


class InMemoryUsers:
    def __init__(self):
        self.rows: dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.rows.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.rows.values() if u.email == email), None)

    def count(self) -> int:
        return len(self.rows)

    def create_user(self, *, email: str, password_hash: str, role: Role, name: str, teacher_id=None) -> int:
        user_id = max(self.rows, default=0) + 1
        self.rows[user_id] = User(
            user_id=user_id,
            email=email,
            password_hash=password_hash,
            role=role,
            name=name,
            teacher_id=teacher_id,
        )
        return user_id


def make_student(student_id: int, name: str, class_name: str, **attendance) -> Student:
    student_type = attendance.pop("student_type", StudentType.EXISTING)
    return Student(
        student_id=student_id,
        nis=f"2024{student_id:03d}",
        name=name,
        class_name=class_name,
        photo="".join(p[0] for p in name.split()).upper(),
        student_type=student_type,
        attendance=AttendanceRecord(student_id=student_id, **attendance),
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 10, 20, 7, 5, 0)


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents(
        [
            make_student(1, "Ahmad Fauzi", "X-A"),
            make_student(2, "Siti Nurhaliza", "X-A"),
            make_student(3, "Budi Santoso", "X-B", student_type=StudentType.NEW),
            make_student(4, "Dewi Lestari", "XI-A", student_type=StudentType.TRANSFER),
        ]
    )


@pytest.fixture
def attendance_repo(students_repo) -> InMemoryAttendance:
    return InMemoryAttendance(students_repo)


@pytest.fixture
def teachers_repo() -> InMemoryTeachers:
    return InMemoryTeachers(
        [
            Teacher(
                teacher_id=1,
                name="Rina Wulandari",
                subject="Matematika",
                photo="RW",
                schedule=(ScheduleItem(1, "Senin", "07:00", "08:30", "X-A", "R101", "Aljabar"),),
            ),
        ]
    )


@pytest.fixture
def settings_repo() -> InMemorySettings:
    return InMemorySettings()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def container(students_repo, attendance_repo, teachers_repo, settings_repo, users_repo) -> Container:
    return wire_services(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        teachers_repo=teachers_repo,
        settings_repo=settings_repo,
        users_repo=users_repo,
        health_service=HealthService(lambda: ["students", "teachers", "users"]),
        admin_password="admin-password",
        teacher_password="teacher-password",
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("REQUIRE_LOGIN", "0")
    from src.simaka.simaka.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
