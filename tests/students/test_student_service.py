from __future__ import annotations

import dataclasses

import pytest

from src.simaka.simaka.core.enums import AttendanceStatus, GraduationStatus, PromotionStatus, StudentType
from src.simaka.simaka.core.exceptions import NotFoundError, ValidationError
from src.simaka.simaka.students.service import build_filter


def test_enroll_creates_fresh_record(container):
    student = container.student_service.enroll(nis="2024010", name="rizky amelia putri", class_name="X-C")

    assert student.student_id == 5
    assert student.photo == "RAP"
    assert student.student_type is StudentType.NEW
    assert student.attendance.status is AttendanceStatus.UNSET
    assert student.attendance.last_marked_time == "-"
    assert student.attendance.attendance_percentage == 100
    assert (student.attendance.late_count, student.attendance.absent_count) == (0, 0)


def test_enroll_validation(container):
    with pytest.raises(ValidationError, match="required"):
        container.student_service.enroll(nis="", name="A", class_name="X-A")
    with pytest.raises(ValidationError, match="already exists"):
        container.student_service.enroll(nis="2024001", name="Dup", class_name="X-A")
    with pytest.raises(ValidationError):
        container.student_service.enroll(nis="2024011", name="B", class_name="X-A", student_type="alien")


def test_remove_missing_student(container):
    container.student_service.remove(4)
    with pytest.raises(NotFoundError):
        container.student_service.remove(4)


def test_change_class(container):
    student = container.student_service.change_class(1, "XI-B")
    assert student.class_name == "XI-B"

    with pytest.raises(NotFoundError):
        container.student_service.change_class(99, "XI-B")


def test_oversized_fields_are_rejected(container):
    with pytest.raises(ValidationError, match="NIS must be at most 32"):
        container.student_service.enroll(nis="9" * 33, name="Panjang", class_name="X-A")
    with pytest.raises(ValidationError, match="Name must be at most 120"):
        container.student_service.enroll(nis="2024030", name="n" * 121, class_name="X-A")
    with pytest.raises(ValidationError, match="Class must be at most 32"):
        container.student_service.change_class(1, "X" * 33)
    with pytest.raises(ValidationError, match="Next class must be at most 32"):
        container.student_service.set_promotion(1, "naik", "X" * 33)

    assert container.student_service.get(1).class_name == "X-A"


def test_promotion_records_previous_and_next_class(container):
    student = container.student_service.set_promotion(1, "naik", "XI-A")

    assert student.promotion_status is PromotionStatus.PROMOTED
    assert student.previous_class == "X-A"
    assert student.next_class == "XI-A"
    assert student.graduation_status is GraduationStatus.NOT_GRADUATED


def test_graduation_sets_graduation_status(container):
    student = container.student_service.set_promotion(4, "lulus")

    assert student.graduation_status is GraduationStatus.GRADUATED
    assert student.next_class == "XI-A"


def test_promotion_rejects_unknown_status(container):
    with pytest.raises(ValidationError):
        container.student_service.set_promotion(1, "pindah")


def test_details_truncate_sample_records(container, students_repo):
    students_repo.rows[1] = dataclasses.replace(students_repo.rows[1], violations=2, achievements=1)

    details = container.student_service.get_details(1).to_dict()

    assert len(details["recentViolations"]) == 2
    assert len(details["recentAchievements"]) == 1
    assert details["recentViolations"][0]["type"] == "Keterlambatan"


def test_filter_normalization():
    flt = build_filter(class_name="all", search="  ", student_type="transfer", promotion_status="")
    assert flt.class_name is None
    assert flt.search is None
    assert flt.student_type is StudentType.TRANSFER
    assert flt.promotion_status is None

    with pytest.raises(ValidationError):
        build_filter(student_type="alumni")


def test_categories(container):
    assert container.student_service.categories().to_dict() == {
        "totalStudents": 4,
        "newStudents": 1,
        "transferStudents": 1,
        "existingStudents": 2,
    }
