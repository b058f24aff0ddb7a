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
from src.simaka.simaka.database.bootstrap import apply_seed_sql
from src.simaka.simaka.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.config.dictConfig(settings.LOGGING)
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    container = build_container(
        db_config=db_config,
        admin_password=settings.DEFAULT_ADMIN_PASSWORD,
        teacher_password=settings.DEFAULT_TEACHER_PASSWORD,
    )
    created = container.user_service.init_default_users()

    print(f"OK: Seeded database -> {DBConfig.from_mapping(db_config).describe()} (new accounts={len(created)})")


if __name__ == "__main__":
    main()
