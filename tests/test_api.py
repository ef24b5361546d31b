from __future__ import annotations

import pytest

from leave_management.main import create_app
from leave_management.store.memory_store import InMemoryTableStore


@pytest.fixture()
def app():
    return create_app("config.testing", store=InMemoryTableStore())


@pytest.fixture()
def client(app):
    return app.test_client()


def _login(client, username, password):
    return client.post("/api/login", json={"username": username, "password": password})


def test_login_and_me(client):
    assert _login(client, "admin", "wrong").status_code == 401
    assert client.get("/api/me").status_code == 401

    resp = _login(client, "admin", "1234")
    assert resp.status_code == 200
    assert resp.get_json()["role"] == "admin"
    assert client.get("/api/me").get_json()["id"] == "admin-1"

    client.post("/api/logout")
    assert client.get("/api/me").status_code == 401


def test_admin_dashboard_requires_admin(client):
    _login(client, "john", "545454")
    assert client.get("/api/dashboard/admin").status_code == 403

    _login(client, "admin", "1234")
    body = client.get("/api/dashboard/admin").get_json()
    assert body["employeeCount"] == 3
    assert body["pendingCount"] == 2
    assert len(body["recentActivity"]) == 3


def test_employee_manage_flow(client):
    _login(client, "admin", "1234")

    resp = client.post(
        "/api/employees",
        json={"name": "Jane Doe", "email": "jane@example.com", "username": "jane", "department": "Finance", "password": "pw1"},
    )
    assert resp.status_code == 201
    jane = resp.get_json()
    assert jane["leaveBalance"] == 20

    assert client.post("/api/employees", json={"name": "Dup", "username": "jane", "password": "x"}).status_code == 400
    assert client.patch(f"/api/employees/{jane['id']}", json={"department": "Ops"}).get_json()["department"] == "Ops"
    assert client.patch("/api/employees/emp-404", json={"name": "x"}).status_code == 404
    assert len(client.get("/api/employees?q=finance").get_json()) == 0
    assert len(client.get("/api/employees?q=ops").get_json()) == 1

    assert _login(client, "jane", "pw1").status_code == 200

    _login(client, "admin", "1234")
    assert client.delete(f"/api/employees/{jane['id']}").status_code == 200
    assert client.delete(f"/api/employees/{jane['id']}").status_code == 404


def test_leave_request_lifecycle(client):
    _login(client, "khushi", "password")
    resp = client.post(
        "/api/leave-requests",
        json={"type": "annual", "startDate": "2025-05-01", "endDate": "2025-05-04", "reason": "Trip"},
    )
    assert resp.status_code == 201
    created = resp.get_json()
    assert created["status"] == "pending"
    assert created["employeeId"] == "emp-3"

    bad = client.post("/api/leave-requests", json={"type": "annual", "startDate": "2025-05-04", "endDate": "2025-05-01"})
    assert bad.status_code == 400

    assert client.get("/api/employees/emp-2/leave-requests").status_code == 403
    assert client.get("/api/employees/emp-3/leave-requests").get_json()[0]["id"] == created["id"]

    _login(client, "admin", "1234")
    url = f"/api/leave-requests/{created['id']}/status"
    assert client.post(url, json={"status": "rejected"}).status_code == 400
    assert client.post(url, json={"status": "approved"}).get_json()["status"] == "approved"
    assert client.post(url, json={"status": "rejected", "rejectionReason": "late"}).status_code == 409
    assert client.post("/api/leave-requests/leave-404/status", json={"status": "approved"}).status_code == 404

    summary = client.get("/api/dashboard/employees/emp-3").get_json()
    assert summary["availableLeaveDays"] == 16
    assert summary["usedLeaveDays"] == 4

    pending = client.get("/api/leave-requests?status=pending").get_json()
    assert [r["id"] for r in pending] == ["leave-1", "leave-2"]


def test_admin_cannot_apply_for_leave(client):
    _login(client, "admin", "1234")
    resp = client.post("/api/leave-requests", json={"type": "sick", "startDate": "2025-05-01", "endDate": "2025-05-01"})
    assert resp.status_code == 403


def test_guards_ignore_sessions_of_other_clients(app, client):
    _login(client, "admin", "1234")
    other = app.test_client()

    assert other.get("/api/employees").status_code == 401
    assert other.get("/api/me").status_code == 401
    assert other.post("/api/leave-requests/leave-1/status", json={"status": "approved"}).status_code == 401
    assert client.get("/api/employees").status_code == 200


def test_logout_clears_client_session(app, client):
    _login(client, "admin", "1234")
    client.post("/api/logout")
    _login(app.test_client(), "john", "545454")

    assert client.get("/api/me").status_code == 401


@pytest.mark.parametrize(
    "method,url",
    [
        ("post", "/api/employees"),
        ("patch", "/api/employees/emp-1"),
        ("post", "/api/leave-requests/leave-1/status"),
    ],
)
def test_non_object_json_body_is_a_bad_request(client, method, url):
    _login(client, "admin", "1234")

    resp = getattr(client, method)(url, json=[1])

    assert resp.status_code == 400
    assert "JSON object" in resp.get_json()["error"]


def test_non_object_login_body_is_a_bad_request(client):
    assert client.post("/api/login", json=["admin", "1234"]).status_code == 400
