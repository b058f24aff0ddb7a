from __future__ import annotations

import importlib
import logging.config
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.simaka.simaka.database.bootstrap import apply_schema, list_tables
from src.simaka.simaka.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.config.dictConfig(settings.LOGGING)
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {DBConfig.from_mapping(db_config).describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
