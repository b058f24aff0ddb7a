from __future__ import annotations

import io
from datetime import date

import pandas as pd
import pytest

from src.simaka.simaka.core.enums import ReportType
from src.simaka.simaka.core.exceptions import ValidationError
from src.simaka.simaka.reports.exporter import ReportExporter
from src.simaka.simaka.reports.model import Report


@pytest.fixture
def report() -> Report:
    return Report(
        report_type=ReportType.CLASS,
        generated_on=date(2025, 10, 20),
        data={},
        tables={
            "Per Kelas": [
                {"class": "X-A", "totalStudents": 2, "averageAttendance": 97.5},
                {"class": "X-B", "totalStudents": 2, "averageAttendance": 75.0},
            ],
            "Statistik": [{"metric": "totalStudents", "value": 4}],
        },
    )


def test_excel_export_has_one_sheet_per_table(report):
    exported = ReportExporter().export(report, "excel")

    assert exported.filename == "laporan-kehadiran-class-2025-10-20.xlsx"
    sheets = pd.read_excel(io.BytesIO(exported.content), sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["Per Kelas", "Statistik"]
    assert sheets["Per Kelas"]["class"].tolist() == ["X-A", "X-B"]


def test_csv_export_sections(report):
    exported = ReportExporter().export(report, "csv")

    assert exported.filename == "laporan-kehadiran-class-2025-10-20.csv"
    assert exported.content.startswith(b"\xef\xbb\xbf")
    lines = exported.content.decode("utf-8-sig").splitlines()
    assert lines[0] == "Per Kelas"
    assert lines[1] == "class,totalStudents,averageAttendance"
    assert lines[2] == "X-A,2,97.5"
    assert "Statistik" in lines


def test_pdf_is_not_an_export_format(report):
    with pytest.raises(ValidationError):
        ReportExporter().export(report, "pdf")
