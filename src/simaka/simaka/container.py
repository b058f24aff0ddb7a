from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Mapping

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_ATTENDANCE_MAX_RETRIES
from .database.bootstrap import list_tables
from .database.connection import DBConfig, DatabaseConnection
from .health.service import HealthService
from .reports.exporter import ReportExporter
from .reports.service import ReportService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository
from .teachers.service import TeacherService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    teachers_repo: TeacherRepository
    settings_repo: SettingsRepository
    users_repo: UserRepository

    student_service: StudentService
    attendance_service: AttendanceService
    teacher_service: TeacherService
    settings_service: SettingsService
    auth_service: AuthService
    user_service: UserService
    report_service: ReportService
    report_exporter: ReportExporter
    health_service: HealthService


def wire_services(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    teachers_repo: TeacherRepository,
    settings_repo: SettingsRepository,
    users_repo: UserRepository,
    health_service: HealthService,
    max_retries: int = DEFAULT_ATTENDANCE_MAX_RETRIES,
    admin_password: str,
    teacher_password: str,
) -> Container:
    """Build the services over any set of repositories (MySQL or in-memory)."""

    student_service = StudentService(students_repo)
    return Container(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        teachers_repo=teachers_repo,
        settings_repo=settings_repo,
        users_repo=users_repo,
        student_service=student_service,
        attendance_service=AttendanceService(attendance_repo, student_service, max_retries=max_retries),
        teacher_service=TeacherService(teachers_repo),
        settings_service=SettingsService(settings_repo),
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, admin_password=admin_password, teacher_password=teacher_password),
        report_service=ReportService(student_service),
        report_exporter=ReportExporter(),
        health_service=health_service,
    )


def build_container(
    *,
    db_config: Mapping,
    max_retries: int = DEFAULT_ATTENDANCE_MAX_RETRIES,
    admin_password: str,
    teacher_password: str,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_services(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        users_repo=MySQLUserRepository(conn),
        health_service=HealthService(partial(list_tables, db_config)),
        max_retries=max_retries,
        admin_password=admin_password,
        teacher_password=teacher_password,
    )
