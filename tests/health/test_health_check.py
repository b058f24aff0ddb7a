from __future__ import annotations

from src.simaka.simaka.health.service import HealthService


def test_health_check_ok(client):
    resp = client.get("/api/health-check")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["connected"] is True
    assert body["tables"] == ["students", "teachers", "users"]
    assert "timestamp" in body


def test_unreachable_database_is_reported():
    def down():
        raise OSError("Can't connect to MySQL server")

    status = HealthService(down).check()

    assert status.connected is False
    assert status.to_dict()["message"] == "Can't connect to MySQL server"
