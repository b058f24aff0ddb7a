from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Callable, Sequence

from ..attendance.ledger import compute_system_stats, round_half_up
from ..common.datetime_utils import now_local
from ..common.validators import require_choice
from ..core.constants import NOT_RECORDED, TOP_STUDENTS_LIMIT
from ..core.enums import AttendanceStatus, PromotionStatus, ReportType
from ..students.model import Student
from ..students.service import StudentService
from .model import Report

logger = logging.getLogger(__name__)


def _attendance_row(s: Student) -> dict:
    a = s.attendance
    return {
        "id": s.student_id,
        "nis": s.nis,
        "name": s.name,
        "class": s.class_name,
        "late": a.late_count,
        "absent": a.absent_count,
        "permission": a.permission_count,
        "attendance": a.attendance_percentage,
        "currentStatus": a.status.value,
        "promotionStatus": s.promotion_status.value,
        "currentTime": a.last_marked_time,
    }


def _stats_rows(stats: dict) -> list[dict]:
    return [{"metric": k, "value": v} for k, v in stats.items()]


class ReportService:
    """Builds the report views over the current student roster."""

    def __init__(self, students: StudentService):
        self._students = students
        self._builders: dict[ReportType, Callable[[Sequence[Student], dict], tuple[dict, dict]]] = {
            ReportType.SUMMARY: self._summary,
            ReportType.PERFORMANCE: self._performance,
            ReportType.DETAILED: self._detailed,
            ReportType.CLASS: self._class,
            ReportType.PROMOTION: self._promotion,
            ReportType.ATTENDANCE: self._attendance,
        }

    def build(self, report_type: Any = None) -> Report:
        rtype = require_choice(report_type or ReportType.SUMMARY.value, ReportType, "report type")
        students = list(self._students.list_students())
        stats = compute_system_stats(s.attendance for s in students).to_dict()

        data, tables = self._builders[rtype](students, stats)
        data["attendanceStats"] = stats
        if rtype is not ReportType.SUMMARY:
            tables.setdefault("Statistik", _stats_rows(stats))
        logger.info("Built %s report over %d students", rtype.value, len(students))
        return Report(report_type=rtype, generated_on=now_local().date(), data=data, tables=tables)

    def _summary(self, students: Sequence[Student], stats: dict) -> tuple[dict, dict]:
        categories = self._students.categories().to_dict()
        return (
            {"studentCategories": categories},
            {"Ringkasan": _stats_rows(stats) + _stats_rows(categories)},
        )

    def _performance(self, students: Sequence[Student], stats: dict) -> tuple[dict, dict]:
        pct = [s.attendance.attendance_percentage for s in students]
        most_late = sorted(students, key=lambda s: s.attendance.late_count, reverse=True)[:TOP_STUDENTS_LIMIT]
        most_absent = sorted(students, key=lambda s: s.attendance.absent_count, reverse=True)[:TOP_STUDENTS_LIMIT]
        buckets = {
            "perfectAttendance": sum(1 for p in pct if p == 100),
            "highAttendance": sum(1 for p in pct if 90 <= p < 100),
            "mediumAttendance": sum(1 for p in pct if 75 <= p < 90),
            "lowAttendance": sum(1 for p in pct if p < 75),
        }
        performance = dict(buckets)
        performance["mostLate"] = [s.to_dict() for s in most_late]
        performance["mostAbsent"] = [s.to_dict() for s in most_absent]
        return (
            {"performanceData": performance},
            {
                "Kinerja": _stats_rows(buckets),
                "Paling Terlambat": [_attendance_row(s) for s in most_late],
                "Paling Tidak Hadir": [_attendance_row(s) for s in most_absent],
            },
        )

    def _detailed(self, students: Sequence[Student], stats: dict) -> tuple[dict, dict]:
        rows = []
        for s in students:
            row = _attendance_row(s)
            row["nextClass"] = s.next_class or NOT_RECORDED
            rows.append(row)
        return {"students": rows}, {"Detail Siswa": rows}

    def _attendance(self, students: Sequence[Student], stats: dict) -> tuple[dict, dict]:
        rows = [_attendance_row(s) for s in students]
        return {"students": rows}, {"Kehadiran": rows}

    def _class(self, students: Sequence[Student], stats: dict) -> tuple[dict, dict]:
        by_class: "OrderedDict[str, dict]" = OrderedDict()
        sums: dict[str, int] = {}
        status_key = {
            AttendanceStatus.PRESENT: "present",
            AttendanceStatus.LATE: "late",
            AttendanceStatus.ABSENT: "absent",
            AttendanceStatus.EXCUSED_PERMISSION: "permission",
            AttendanceStatus.EXCUSED_SICK: "permission",
        }
        promotion_key = {
            PromotionStatus.PROMOTED: "promoted",
            PromotionStatus.RETAINED: "retained",
            PromotionStatus.GRADUATED: "graduated",
        }

        for s in students:
            c = by_class.get(s.class_name)
            if c is None:
                c = by_class[s.class_name] = {
                    "class": s.class_name,
                    "totalStudents": 0,
                    "present": 0,
                    "late": 0,
                    "absent": 0,
                    "permission": 0,
                    "averageAttendance": 0,
                    "promoted": 0,
                    "retained": 0,
                    "graduated": 0,
                    "totalLate": 0,
                    "totalAbsent": 0,
                    "totalPermission": 0,
                }
                sums[s.class_name] = 0

            a = s.attendance
            c["totalStudents"] += 1
            sums[s.class_name] += a.attendance_percentage
            c["totalLate"] += a.late_count
            c["totalAbsent"] += a.absent_count
            c["totalPermission"] += a.permission_count
            if a.status in status_key:
                c[status_key[a.status]] += 1
            if s.promotion_status in promotion_key:
                c[promotion_key[s.promotion_status]] += 1

        for name, c in by_class.items():
            # Math.round(sum / n * 10) / 10
            c["averageAttendance"] = round_half_up(sums[name] * 10, c["totalStudents"]) / 10

        rows = list(by_class.values())
        return {"classReports": rows}, {"Per Kelas": rows}

    def _promotion(self, students: Sequence[Student], stats: dict) -> tuple[dict, dict]:
        counts = {
            "promoted": sum(1 for s in students if s.promotion_status is PromotionStatus.PROMOTED),
            "retained": sum(1 for s in students if s.promotion_status is PromotionStatus.RETAINED),
            "graduated": sum(1 for s in students if s.promotion_status is PromotionStatus.GRADUATED),
            "undecided": sum(1 for s in students if s.promotion_status is PromotionStatus.UNDECIDED),
        }
        detailed = [
            {
                "id": s.student_id,
                "nis": s.nis,
                "name": s.name,
                "class": s.class_name,
                "currentStatus": s.attendance.status.value,
                "promotionStatus": s.promotion_status.value,
                "nextClass": s.next_class or NOT_RECORDED,
                "currentTime": s.attendance.last_marked_time,
                "attendancePercentage": s.attendance.attendance_percentage,
                "lateCount": s.attendance.late_count,
                "absentCount": s.attendance.absent_count,
                "permissionCount": s.attendance.permission_count,
            }
            for s in students
        ]
        return (
            {"promotionStats": counts, "detailedStats": detailed},
            {"Kenaikan Kelas": _stats_rows(counts), "Detail Kenaikan": detailed},
        )
