from __future__ import annotations

from typing import Optional, Protocol

from .model import SchoolSettings


class SettingsRepository(Protocol):
    def get(self) -> Optional[SchoolSettings]:
        raise NotImplementedError

    def save(self, settings: SchoolSettings) -> SchoolSettings:
        """Insert or overwrite the settings row."""

        raise NotImplementedError
