from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for route guards."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Daily attendance status of a student.

    Member names are the semantic names used in code; values are the tokens
    stored in the database and exchanged over the API.
    """

    PRESENT = "hadir"
    LATE = "terlambat"
    ABSENT = "tidak-hadir"
    EXCUSED_PERMISSION = "izin"
    EXCUSED_SICK = "sakit"
    UNSET = "belum-diisi"


class StudentType(str, Enum):
    EXISTING = "existing"
    NEW = "new"
    TRANSFER = "transfer"


class PromotionStatus(str, Enum):
    PROMOTED = "naik"
    RETAINED = "tinggal"
    GRADUATED = "lulus"
    UNDECIDED = "belum-ditetapkan"


class GraduationStatus(str, Enum):
    GRADUATED = "lulus"
    NOT_GRADUATED = "belum-lulus"


class ReportType(str, Enum):
    SUMMARY = "summary"
    PERFORMANCE = "performance"
    DETAILED = "detailed"
    CLASS = "class"
    PROMOTION = "promotion"
    ATTENDANCE = "attendance"


class ExportFormat(str, Enum):
    EXCEL = "excel"
    CSV = "csv"
