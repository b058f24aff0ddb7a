from __future__ import annotations


def test_get_report(client):
    body = client.get("/api/reports?type=class").get_json()
    assert body["reportType"] == "class"
    assert {r["class"] for r in body["classReports"]} == {"X-A", "X-B", "XI-A"}

    assert client.get("/api/reports?type=monthly").status_code == 400


def test_export_report(client):
    resp = client.post("/api/reports/export", json={"format": "csv", "reportType": "attendance"})

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "laporan-kehadiran-attendance-" in resp.headers["Content-Disposition"]


def test_export_validation(client):
    assert client.post("/api/reports/export", json={"format": "csv"}).status_code == 400
    assert client.post("/api/reports/export", json={"format": "pdf", "reportType": "summary"}).status_code == 400
