from __future__ import annotations

import importlib
import logging
import logging.config
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_ATTENDANCE_MAX_RETRIES
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .attendance.controller import register as register_attendance
from .health.controller import register as register_health
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Pass `container` to run over pre-built repositories (tests); the database
    bootstrap is skipped in that case.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging_config = getattr(settings, "LOGGING", None)
    if logging_config:
        logging.config.dictConfig(logging_config)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["REQUIRE_LOGIN"] = bool(getattr(settings, "REQUIRE_LOGIN", True))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            max_retries=int(getattr(settings, "ATTENDANCE_MAX_RETRIES", DEFAULT_ATTENDANCE_MAX_RETRIES)),
            admin_password=getattr(settings, "DEFAULT_ADMIN_PASSWORD"),
            teacher_password=getattr(settings, "DEFAULT_TEACHER_PASSWORD"),
        )
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            container.user_service.init_default_users()

    register_users(app, container)
    register_attendance(app, container)
    register_students(app, container)
    register_teachers(app, container)
    register_settings(app, container)
    register_reports(app, container)
    register_health(app, container)

    return app
