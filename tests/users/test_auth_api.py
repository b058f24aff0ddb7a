from __future__ import annotations


def test_login_me_logout(client):
    assert client.post("/api/init-users").get_json()["users"][0]["role"] == "admin"
    assert client.post("/api/init-users").get_json()["message"] == "Users already initialized"

    assert client.get("/api/auth/me").status_code == 401

    resp = client.post("/api/auth/login", json={"email": "teacher@namira.sch.id", "password": "teacher-password"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "teacher"

    assert client.get("/api/auth/me").get_json()["user"]["email"] == "teacher@namira.sch.id"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_login_failures(client):
    client.post("/api/init-users")

    assert client.post("/api/auth/login", json={"email": "admin@namira.sch.id"}).status_code == 400
    assert client.post("/api/auth/login", json={"email": "admin@namira.sch.id", "password": "nope"}).status_code == 401


def test_logged_in_teacher_passes_login_guard(app, client):
    app.config["REQUIRE_LOGIN"] = True
    client.post("/api/init-users")
    client.post("/api/auth/login", json={"email": "teacher@namira.sch.id", "password": "teacher-password"})

    assert client.put("/api/attendance", json={"studentId": 1, "newStatus": "hadir"}).status_code == 200
    assert client.put("/api/settings", json={"theme": "dark"}).status_code == 403
