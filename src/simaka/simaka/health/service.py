from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthStatus:
    connected: bool
    tables: Sequence[str]
    timestamp: datetime
    error: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "success": self.connected,
            "connected": self.connected,
            "tables": list(self.tables),
            "timestamp": self.timestamp.isoformat(),
        }
        if self.error:
            out["message"] = self.error
        return out


class HealthService:
    """Reports whether the database answers and which tables it holds."""

    def __init__(self, list_tables: Callable[[], Sequence[str]]):
        self._list_tables = list_tables

    def check(self) -> HealthStatus:
        try:
            tables = sorted(self._list_tables())
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return HealthStatus(connected=False, tables=(), timestamp=now_local(), error=str(e))
        return HealthStatus(connected=True, tables=tables, timestamp=now_local())
