"""Start a new school day: every student back to "belum-diisi".

Counters and percentages are kept. Meant for a daily cron job.
"""
from __future__ import annotations

import importlib
import logging.config
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.simaka.simaka.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.config.dictConfig(settings.LOGGING)
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        admin_password=settings.DEFAULT_ADMIN_PASSWORD,
        teacher_password=settings.DEFAULT_TEACHER_PASSWORD,
    )
    count = container.attendance_service.start_new_day()
    print(f"OK: Reset daily status for {count} students")


if __name__ == "__main__":
    main()
