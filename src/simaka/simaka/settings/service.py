from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping

from ..common.validators import require_clock, require_non_empty
from ..core.constants import SETTINGS_MAX_LENGTHS
from ..core.exceptions import ValidationError
from .model import SchoolSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

_CLOCK_KEYS = {"start_time", "end_time"}
_KNOWN_KEYS = {f.name for f in dataclasses.fields(SchoolSettings)}


class SettingsService:
    """Use case: read and update the school-wide settings."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def current(self) -> SchoolSettings:
        """Stored settings; the default row is created on first read."""

        settings = self._settings.get()
        if settings is None:
            settings = self._settings.save(SchoolSettings.defaults())
            logger.info("Created default school settings")
        return settings

    def update(self, patch: Mapping[str, Any]) -> SchoolSettings:
        unknown = sorted(set(patch) - _KNOWN_KEYS)
        if unknown:
            raise ValidationError(f"Unknown settings: {', '.join(unknown)}")

        changes: dict[str, Any] = {}
        for key, value in patch.items():
            if key == "notifications":
                if not isinstance(value, bool):
                    raise ValidationError("notifications must be true or false")
                changes[key] = value
            elif key in _CLOCK_KEYS:
                changes[key] = require_clock(value, key)
            else:
                changes[key] = require_non_empty(value, key, max_len=SETTINGS_MAX_LENGTHS.get(key))

        updated = dataclasses.replace(self.current(), **changes)
        if updated.start_time >= updated.end_time:
            raise ValidationError("start_time must be before end_time")

        saved = self._settings.save(updated)
        logger.info("Settings updated: %s", ", ".join(sorted(changes)) or "no changes")
        return saved
