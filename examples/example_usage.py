"""Example: use the service layer directly (no Flask).

Controllers are thin; the attendance rules live in the services and ledger.
"""

import importlib

from config import get_settings_module

from src.simaka.simaka.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        admin_password=settings.DEFAULT_ADMIN_PASSWORD,
        teacher_password=settings.DEFAULT_TEACHER_PASSWORD,
    )
    result = container.attendance_service.update_status(1, "terlambat")
    print(result.student.to_dict())
    print(result.stats.to_dict())


if __name__ == "__main__":
    main()
