# tests/services/test_catalog_api.py
from __future__ import annotations

import uuid
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError as DBIntegrityError
from starlette.testclient import TestClient

from roster.services.api.app import create_app


def test_healthz(api_client):
    r = api_client.get("/healthz")
    assert r.status_code == 200, r.text
    assert r.json()["ok"] is True


def test_student_crud_flow(api_client):
    r = api_client.post("/api/students", json={"full_name": "Jane Roe", "email": "jane@example.org"})
    assert r.status_code == 201, r.text
    s: Dict[str, Any] = r.json()
    assert s["full_name"] == "Jane Roe"
    assert s["normalized_name"] == "jane roe"
    sid = s["id"]

    r = api_client.get(f"/api/students/{sid}")
    assert r.status_code == 200, r.text
    assert r.json()["id"] == sid

    r = api_client.get("/api/students", params={"q": "roe"})
    assert r.status_code == 200, r.text
    assert any(x["id"] == sid for x in r.json())

    r = api_client.patch(f"/api/students/{sid}", json={"full_name": "Jane R."})
    assert r.status_code == 200, r.text
    assert r.json()["full_name"] == "Jane R."

    r = api_client.delete(f"/api/students/{sid}")
    assert r.status_code == 204, r.text

    r = api_client.get(f"/api/students/{sid}")
    assert r.status_code == 404, r.text


def test_student_validation_and_missing(api_client):
    r = api_client.post("/api/students", json={"full_name": ""})
    assert r.status_code == 422, r.text

    r = api_client.post("/api/students", json={"full_name": "X", "email": "no-at-sign"})
    assert r.status_code == 422, r.text

    r = api_client.get(f"/api/students/{uuid.uuid4()}")
    assert r.status_code == 404, r.text
    assert "not found" in r.json()["detail"]


def test_course_crud_flow(api_client):
    r = api_client.post("/api/courses", json={"code": "hist-110", "title": "World History"})
    assert r.status_code == 201, r.text
    c = r.json()
    assert c["code"] == "HIST-110"
    assert c["slug"] == "world-history"

    r = api_client.patch(f"/api/courses/{c['id']}", json={"title": "Modern World History"})
    assert r.status_code == 200, r.text
    assert r.json()["slug"] == "modern-world-history"

    r = api_client.get("/api/courses", params={"q": "hist"})
    assert r.status_code == 200, r.text
    assert [x["id"] for x in r.json()] == [c["id"]]

    r = api_client.delete(f"/api/courses/{c['id']}")
    assert r.status_code == 204, r.text


def test_duplicate_course_code_is_a_conflict(api_client):
    r = api_client.post("/api/courses", json={"code": "CS-1", "title": "Programming I"})
    assert r.status_code == 201, r.text

    # codes are upper-cased before the uniqueness check
    r = api_client.post("/api/courses", json={"code": "cs-1", "title": "Programming again"})
    assert r.status_code == 409, r.text
    assert "CS-1" in r.json()["detail"]

    r = api_client.post("/api/courses", json={"code": "CS-2", "title": "Programming II"})
    assert r.status_code == 201, r.text
    cs2 = r.json()["id"]

    r = api_client.patch(f"/api/courses/{cs2}", json={"code": "cs-1"})
    assert r.status_code == 409, r.text
    assert api_client.get(f"/api/courses/{cs2}").json()["code"] == "CS-2"

    # keeping its own code is not a conflict
    r = api_client.patch(f"/api/courses/{cs2}", json={"code": "CS-2", "title": "Programming 2"})
    assert r.status_code == 200, r.text


def test_duplicate_student_email_is_a_conflict(api_client):
    r = api_client.post("/api/students", json={"full_name": "A One", "email": "a@x.org"})
    assert r.status_code == 201, r.text
    first = r.json()["id"]

    r = api_client.post("/api/students", json={"full_name": "A Two", "email": "A@x.org"})
    assert r.status_code == 409, r.text

    r = api_client.post("/api/students", json={"full_name": "B", "email": "b@x.org"})
    assert r.status_code == 201, r.text
    second = r.json()["id"]

    r = api_client.patch(f"/api/students/{second}", json={"full_name": "B Renamed", "email": "A@X.org"})
    assert r.status_code == 409, r.text
    assert api_client.get(f"/api/students/{second}").json()["full_name"] == "B"

    r = api_client.patch(f"/api/students/{first}", json={"email": "A@x.org"})
    assert r.status_code == 200, r.text
    assert r.json()["email"] == "a@x.org"


def test_database_constraint_violation_maps_to_conflict():
    app = create_app()

    @app.get("/_constraint")
    def _constraint():
        raise DBIntegrityError("INSERT INTO course ...", {}, Exception("duplicate key value"))

    with TestClient(app) as client:
        r = client.get("/_constraint")
    assert r.status_code == 409, r.text
    assert "duplicate key value" in r.json()["detail"]
