"""Tests for the auth and task HTTP endpoints."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from taskflow.core.config import constants


def _signup(client: TestClient, email: str = "alice@example.com", name: str = "Alice") -> dict:
    response = client.post("/auth/signup", json={"email": email, "password": "password123", "name": name})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def logged_in(client) -> dict:
    """Sign up Alice; the client keeps her session cookie."""
    return _signup(client)


@pytest.mark.unit
class TestAuthEndpoints:
    def test_signup_sets_session_and_hides_password(self, client):
        user = _signup(client)

        assert user["email"] == "alice@example.com"
        assert user["name"] == "Alice"
        assert "createdAt" in user
        assert "password" not in user
        assert constants.SESSION_COOKIE_NAME in client.cookies

    def test_signup_validation_error_shape(self, client):
        response = client.post("/auth/signup", json={"email": "a@example.com", "password": "123", "name": "A"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "ERR_VALIDATION"
        assert error["message"] == "Password must be at least 6 characters"

    def test_signup_missing_fields(self, client):
        response = client.post("/auth/signup", json={})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Email, password, and name are required"

    def test_duplicate_signup_is_conflict(self, client):
        _signup(client)

        response = client.post(
            "/auth/signup", json={"email": "alice@example.com", "password": "password123", "name": "Alice"}
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ERR_USER_ALREADY_EXISTS"

    def test_login_and_me(self, client):
        created = _signup(client)
        client.cookies.clear()

        response = client.post("/auth/login", json={"email": "alice@example.com", "password": "password123"})
        me = client.get("/auth/me")

        assert response.status_code == 200
        assert me.status_code == 200
        assert me.json()["id"] == created["id"]

    def test_login_wrong_password(self, client):
        _signup(client)
        client.cookies.clear()

        response = client.post("/auth/login", json={"email": "alice@example.com", "password": "password124"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid email or password"

    def test_me_without_session(self, client):
        assert client.get("/auth/me").status_code == 401

    def test_me_with_tampered_cookie(self, client):
        client.cookies.set(constants.SESSION_COOKIE_NAME, "not-a-signed-token")

        assert client.get("/auth/me").status_code == 401

    def test_logout_ends_session(self, client, logged_in):
        response = client.post("/auth/logout")

        assert response.status_code == 204
        assert client.get("/auth/me").status_code == 401


@pytest.mark.unit
class TestTaskEndpoints:
    def test_requires_session(self, client):
        assert client.get("/tasks").status_code == 401
        assert client.post("/tasks", json={"title": "T"}).status_code == 401

    def test_create_and_list(self, client, logged_in):
        response = client.post("/tasks", json={"title": "Write report", "description": "Q3"})

        assert response.status_code == 201
        task = response.json()
        assert task["status"] == "todo"
        assert task["userId"] == logged_in["id"]

        listed = client.get("/tasks").json()
        assert [t["id"] for t in listed] == [task["id"]]

    def test_create_blank_title(self, client, logged_in):
        response = client.post("/tasks", json={"title": "   "})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Task title is required"

    def test_filter_by_status(self, client, logged_in):
        client.post("/tasks", json={"title": "A", "status": "todo"})
        client.post("/tasks", json={"title": "B", "status": "done"})

        assert [t["title"] for t in client.get("/tasks", params={"status": "todo"}).json()] == ["A"]
        assert [t["title"] for t in client.get("/tasks", params={"status": "done"}).json()] == ["B"]
        assert len(client.get("/tasks", params={"status": "all"}).json()) == 2

    def test_filter_by_unknown_status(self, client, logged_in):
        response = client.get("/tasks", params={"status": "archived"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid task status: archived"

    def test_patch_is_partial(self, client, logged_in):
        task = client.post("/tasks", json={"title": "T", "description": "D"}).json()

        response = client.patch(f"/tasks/{task['id']}", json={"status": "in-progress"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "in-progress"
        assert updated["title"] == "T"
        assert updated["description"] == "D"
        assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(task["updatedAt"])

    def test_patch_blank_title(self, client, logged_in):
        task = client.post("/tasks", json={"title": "T"}).json()

        response = client.patch(f"/tasks/{task['id']}", json={"title": ""})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Task title cannot be empty"

    def test_delete(self, client, logged_in):
        task = client.post("/tasks", json={"title": "T"}).json()

        assert client.delete(f"/tasks/{task['id']}").status_code == 204
        assert client.get(f"/tasks/{task['id']}").status_code == 404
        assert client.get("/tasks").json() == []

    def test_other_users_tasks_are_hidden(self, client, logged_in):
        task = client.post("/tasks", json={"title": "Alice's"}).json()
        client.post("/auth/logout")
        _signup(client, email="bob@example.com", name="Bob")

        assert client.get("/tasks").json() == []
        assert client.get(f"/tasks/{task['id']}").status_code == 404
        assert client.patch(f"/tasks/{task['id']}", json={"status": "done"}).status_code == 404
        assert client.delete(f"/tasks/{task['id']}").status_code == 404

    def test_unknown_task(self, client, logged_in):
        response = client.get("/tasks/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ERR_NOT_FOUND"
