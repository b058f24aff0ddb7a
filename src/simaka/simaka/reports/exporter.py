"""Tabular report exports (Excel workbook, CSV)."""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Any

import pandas as pd

from ..common.validators import require_choice
from ..core.enums import ExportFormat
from .model import Report

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MIMETYPE = "text/csv"

# Excel rejects longer sheet names.
_MAX_SHEET_NAME = 31


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    mimetype: str
    content: bytes


def export_filename(report: Report, fmt: ExportFormat) -> str:
    ext = "xlsx" if fmt is ExportFormat.EXCEL else "csv"
    return f"laporan-kehadiran-{report.report_type.value}-{report.generated_on.strftime('%Y-%m-%d')}.{ext}"


class ReportExporter:
    def export(self, report: Report, fmt: Any) -> ExportedFile:
        fmt = require_choice(fmt, ExportFormat, "format")
        if fmt is ExportFormat.EXCEL:
            return ExportedFile(export_filename(report, fmt), XLSX_MIMETYPE, self.to_excel(report))
        return ExportedFile(export_filename(report, fmt), CSV_MIMETYPE, self.to_csv(report))

    def to_excel(self, report: Report) -> bytes:
        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            for name, rows in report.tables.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=name[:_MAX_SHEET_NAME], index=False)
        return out.getvalue()

    def to_csv(self, report: Report) -> bytes:
        """One CSV file; each table is a titled section followed by a blank line."""

        out = io.StringIO()
        plain = csv.writer(out)
        for name, rows in report.tables.items():
            plain.writerow([name])
            if rows:
                writer = csv.DictWriter(out, fieldnames=list(rows[0].keys()))
                writer.writeheader()
                for row in rows:
                    writer.writerow(row)
            plain.writerow([])
        # BOM so Excel opens the file as UTF-8.
        return out.getvalue().encode("utf-8-sig")
