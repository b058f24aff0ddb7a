from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SchoolSettings
from .repository import SettingsRepository

# The table holds exactly one row.
SETTINGS_ROW_ID = 1


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[SchoolSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT school_name, academic_year, semester, start_time, end_time, notifications, language, theme
                FROM school_settings
                WHERE settings_id=%s
                """,
                (SETTINGS_ROW_ID,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SchoolSettings(
                school_name=r["school_name"],
                academic_year=r["academic_year"],
                semester=r["semester"],
                start_time=str(r["start_time"])[:5],
                end_time=str(r["end_time"])[:5],
                notifications=bool(r["notifications"]),
                language=r["language"],
                theme=r["theme"],
            )

    def save(self, settings: SchoolSettings) -> SchoolSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO school_settings(
                    settings_id, school_name, academic_year, semester, start_time, end_time,
                    notifications, language, theme
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    school_name=VALUES(school_name),
                    academic_year=VALUES(academic_year),
                    semester=VALUES(semester),
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time),
                    notifications=VALUES(notifications),
                    language=VALUES(language),
                    theme=VALUES(theme)
                """,
                (
                    SETTINGS_ROW_ID,
                    settings.school_name,
                    settings.academic_year,
                    settings.semester,
                    settings.start_time,
                    settings.end_time,
                    int(settings.notifications),
                    settings.language,
                    settings.theme,
                ),
            )
        return settings
