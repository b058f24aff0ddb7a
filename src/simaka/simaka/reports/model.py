from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..core.enums import ReportType


@dataclass(frozen=True)
class Report:
    """A built report.

    `data` is the JSON body returned by GET /api/reports. `tables` holds the
    same content flattened into named row lists for the tabular exports.
    """

    report_type: ReportType
    generated_on: date
    data: dict
    tables: dict[str, list[dict]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"success": True, "reportType": self.report_type.value, **self.data}
