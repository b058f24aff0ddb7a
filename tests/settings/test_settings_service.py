from __future__ import annotations

import pytest

from src.simaka.simaka.core.exceptions import ValidationError
from src.simaka.simaka.settings.model import SchoolSettings


def test_first_read_creates_defaults(container, settings_repo):
    settings = container.settings_service.current()

    assert settings == SchoolSettings.defaults()
    assert settings_repo.row == settings
    assert settings.school_name == "SMA Namira"


def test_update_only_touches_given_keys(container):
    updated = container.settings_service.update({"semester": "Genap", "notifications": False})

    assert updated.semester == "Genap"
    assert updated.notifications is False
    assert updated.academic_year == "2025/2026"


@pytest.mark.parametrize(
    "patch",
    [
        {"mascot": "eagle"},
        {"start_time": "7am"},
        {"start_time": "16:00"},
        {"notifications": "yes"},
        {"school_name": "   "},
        {"language": "bahasa-indonesia"},
        {"theme": "x" * 17},
        {"academic_year": "2025/2026 semester ganjil"},
    ],
)
def test_invalid_updates(container, settings_repo, patch):
    with pytest.raises(ValidationError):
        container.settings_service.update(patch)


def test_settings_api(client):
    assert client.get("/api/settings").get_json()["settings"]["theme"] == "light"

    resp = client.put("/api/settings", json={"theme": "dark"})
    assert resp.status_code == 200
    assert resp.get_json()["settings"]["theme"] == "dark"

    assert client.put("/api/settings", json={"color": "red"}).status_code == 400
