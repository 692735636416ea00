"""
Tests for the users endpoints.

GET /api/users, GET /api/users/{id} and POST /api/users through the full
application stack (middleware, exception handlers, lifespan).
"""

import json

from fastapi.testclient import TestClient

from api.config import DatabaseSettings, Settings, StorageSettings
from api.main import create_application


class TestListUsers:
    """Tests for GET /api/users."""

    def test_empty_store(self, client):
        """Test an empty database lists no users."""
        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first(self, client, user_payload):
        """Test users come back most recently created first."""
        client.post("/api/users", json={**user_payload, "email": "first@company.com"})
        client.post("/api/users", json={**user_payload, "email": "second@company.com"})

        emails = [u["email"] for u in client.get("/api/users").json()]

        assert emails == ["second@company.com", "first@company.com"]

    def test_correlation_id_echoed(self, client):
        """Test the correlation ID header is passed through."""
        response = client.get("/api/users", headers={"X-Correlation-ID": "req_test123"})

        assert response.headers["X-Correlation-ID"] == "req_test123"
        assert "X-Response-Time" in response.headers


class TestCreateUser:
    """Tests for POST /api/users."""

    def test_create_success(self, client, user_payload):
        """Test adding a user returns 201 with the new ID."""
        response = client.post("/api/users", json=user_payload)

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["message"] == "User created successfully"

    def test_created_user_is_retrievable(self, client, user_payload):
        """Test the stored record matches what was submitted."""
        user_id = client.post("/api/users", json=user_payload).json()["id"]

        response = client.get(f"/api/users/{user_id}")

        assert response.status_code == 200
        user = response.json()
        assert user["id"] == user_id
        assert user["name"] == "Ada Lovelace"
        assert user["email"] == "ada.lovelace@company.com"
        assert user["department"] == "Engineering"
        assert user["salary"] == 120000
        assert user["hire_date"] == "2024-02-01"
        assert user["created_at"]

    def test_email_normalized(self, client, user_payload):
        """Test emails are stored lower-case."""
        payload = {**user_payload, "email": "Ada.Lovelace@Company.COM"}
        user_id = client.post("/api/users", json=payload).json()["id"]

        assert client.get(f"/api/users/{user_id}").json()["email"] == "ada.lovelace@company.com"

    def test_phone_optional(self, client, user_payload):
        """Test a user without a phone number is accepted."""
        payload = {k: v for k, v in user_payload.items() if k != "phone"}

        response = client.post("/api/users", json=payload)

        assert response.status_code == 201
        user = client.get(f"/api/users/{response.json()['id']}").json()
        assert user["phone"] is None

    def test_duplicate_email_conflict(self, client, user_payload):
        """Test a second user with the same email is rejected."""
        assert client.post("/api/users", json=user_payload).status_code == 201

        response = client.post("/api/users", json={**user_payload, "name": "Other Person"})

        assert response.status_code == 409
        data = response.json()
        assert data["code"] == "EMAIL_ALREADY_EXISTS"
        assert "already exists" in data["message"]
        assert len(client.get("/api/users").json()) == 1

    def test_missing_field(self, client, user_payload):
        """Test a missing required field returns a validation error."""
        payload = {k: v for k, v in user_payload.items() if k != "department"}

        response = client.post("/api/users", json=payload)

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert any("department" in d["field"] for d in data["details"])

    def test_negative_salary_rejected(self, client, user_payload):
        """Test salaries must not be negative."""
        response = client.post("/api/users", json={**user_payload, "salary": -1})
        assert response.status_code == 422

    def test_invalid_email_rejected(self, client, user_payload):
        """Test malformed emails are rejected."""
        response = client.post("/api/users", json={**user_payload, "email": "not-an-email"})
        assert response.status_code == 422

    def test_invalid_hire_date_rejected(self, client, user_payload):
        """Test hire dates must be ISO dates."""
        response = client.post("/api/users", json={**user_payload, "hire_date": "yesterday"})
        assert response.status_code == 422

    def test_infinite_salary_rejected(self, client, user_payload):
        """Test non-finite salaries are a validation error, not a stored row."""
        body = json.dumps({**user_payload, "salary": float("inf")})

        response = client.post(
            "/api/users", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert client.get("/api/users").json() == []

    def test_nan_salary_rejected(self, client, user_payload):
        """Test NaN salaries are rejected."""
        body = json.dumps({**user_payload, "salary": float("nan")})

        response = client.post(
            "/api/users", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422


class TestGetUser:
    """Tests for GET /api/users/{id}."""

    def test_not_found(self, client):
        """Test unknown IDs return 404."""
        response = client.get("/api/users/999999")

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "USER_NOT_FOUND"
        assert data["request_id"].startswith("req_")

    def test_non_numeric_id(self, client):
        """Test a non-integer ID is a validation error."""
        response = client.get("/api/users/abc")
        assert response.status_code == 422

    def test_id_beyond_integer_range(self, client):
        """Test an ID too large for the store is simply not found."""
        response = client.get("/api/users/99999999999999999999")

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"


class TestUnhandledErrors:
    """Tests for exceptions that escape the route handlers."""

    def test_default_settings_hide_exception_text(self, tmp_path, monkeypatch):
        """Test a default-configured app returns the generic 500 message."""
        monkeypatch.delenv("REPORTFORGE_ENVIRONMENT", raising=False)
        monkeypatch.delenv("REPORTFORGE_DEBUG", raising=False)
        settings = Settings(
            seed_sample_data=False,
            database=DatabaseSettings(path=tmp_path / "default.db"),
            storage=StorageSettings(downloads_dir=tmp_path / "downloads"),
        )
        application = create_application(settings)

        @application.get("/api/explode")
        async def explode():
            raise RuntimeError("salary table at /srv/secret.db is corrupt")

        with TestClient(application, raise_server_exceptions=False) as c:
            response = c.get("/api/explode")
            docs = c.get("/api/docs")

        assert response.status_code == 500
        data = response.json()
        assert data["code"] == "INTERNAL_ERROR"
        assert data["message"] == "An unexpected error occurred"
        assert "secret" not in response.text
        assert docs.status_code == 404
