# app/tests/test_login_flow.py
"""
End-to-end tests for the login flow over HTTP.

These tests verify:
1. Current-user resolution (absent, valid, stale session)
2. The login-required gate on /about/me
3. POST /login success and failure, flash message lifetime
4. DELETE /login (directly and via the form method override)
"""
import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from app.config import AppConfig
from app.main import create_application
from auth.service import create_user, delete_user

PASSWORD = "correct-horse"


@pytest.fixture
def app(fresh_db):
    """App with a test-only route exposing the raw session."""
    application = create_application(AppConfig(secret_key="test-secret", secret_key_present=True))

    @application.get("/_test/session")
    async def dump_session(request: Request):
        return dict(request.session)

    return application


@pytest.fixture
def client(app):
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def user(fresh_db):
    return create_user("a@x.com", PASSWORD)


def _login(client, email="a@x.com", password=PASSWORD):
    return client.post("/login", data={"email": email, "password": password})


class TestCurrentUserResolution:
    """Tests for the resolver applied before every request."""

    def test_no_session_is_anonymous(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert 'id="anonymous"' in response.text
        assert client.get("/_test/session").json() == {}

    def test_valid_session_binds_user(self, client, user):
        _login(client)
        response = client.get("/")
        assert "Logged in as a@x.com" in response.text

    def test_stale_session_is_cleared(self, client, user):
        _login(client)
        assert client.get("/_test/session").json() == {"user_id": user.id}

        delete_user(user.id)

        assert client.get("/_test/session").json() == {}
        assert 'id="anonymous"' in client.get("/").text

    def test_stale_session_then_gate_redirects(self, client, user):
        """The stale entry is gone before the gate runs."""
        _login(client)
        delete_user(user.id)

        response = client.get("/about/me")
        assert response.status_code == 302
        assert response.headers["location"] == "/login"


class TestGate:
    """Tests for the login-required gate."""

    def test_anonymous_redirected_to_login(self, client):
        response = client.get("/about/me")
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_gated_logic_not_executed(self, client):
        response = client.get("/about/me")
        assert "about-email" not in response.text

    def test_logged_in_user_sees_page(self, client, user):
        _login(client)
        response = client.get("/about/me")
        assert response.status_code == 200
        assert '<p id="about-email">a@x.com</p>' in response.text


class TestLoginCreate:
    """Tests for POST /login."""

    def test_success_sets_session_and_redirects_root(self, client, user):
        response = _login(client)
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert client.get("/_test/session").json() == {"user_id": user.id}

    def test_email_is_case_insensitive(self, client, user):
        response = _login(client, email="  A@X.COM ")
        assert response.headers["location"] == "/"

    def test_wrong_password_redirects_with_flash(self, client, user):
        response = _login(client, password="wrong")
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

        session = client.get("/_test/session").json()
        assert "user_id" not in session
        assert session["_flash"] == {"error": "Invalid credentials"}

    def test_unknown_email_redirects_with_flash(self, client, user):
        response = _login(client, email="nobody@x.com")
        assert response.headers["location"] == "/login"
        assert client.get("/_test/session").json()["_flash"] == {"error": "Invalid credentials"}

    def test_failures_are_indistinguishable(self, client, user):
        unknown = _login(client, email="nobody@x.com")
        client.get("/login")
        wrong = _login(client, password="wrong")

        assert unknown.status_code == wrong.status_code
        assert unknown.headers["location"] == wrong.headers["location"]

    def test_failure_leaves_existing_login_untouched(self, client, user):
        _login(client)
        _login(client, password="wrong")
        assert client.get("/_test/session").json()["user_id"] == user.id

    def test_missing_fields_count_as_invalid(self, client, user):
        response = client.post("/login", data={})
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_example_wrong_password(self, client):
        """POST email=a@x.com,password=wrong with no such user."""
        response = _login(client, password="wrong")
        assert response.headers["location"] == "/login"
        assert client.get("/login").text.count("Invalid credentials") == 1


class TestLoginNew:
    """Tests for GET /login and flash lifetime."""

    def test_renders_form(self, client):
        response = client.get("/login")
        assert response.status_code == 200
        assert 'name="email"' in response.text
        assert 'name="password"' in response.text
        assert "login-error" not in response.text

    def test_error_shown_exactly_once(self, client, user):
        _login(client, password="wrong")

        first = client.get("/login")
        assert 'id="login-error"' in first.text
        assert "Invalid credentials" in first.text

        second = client.get("/login")
        assert "Invalid credentials" not in second.text
        assert "_flash" not in client.get("/_test/session").json()


class TestLoginDestroy:
    """Tests for DELETE /login."""

    def test_delete_logs_out(self, client, user):
        _login(client)
        response = client.delete("/login")
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert client.get("/_test/session").json() == {}
        assert client.get("/about/me").status_code == 302

    def test_delete_when_anonymous(self, client):
        response = client.delete("/login")
        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_logout_form_uses_method_override(self, client, user):
        _login(client)
        assert 'action="/login?_method=DELETE"' in client.get("/").text

        response = client.post("/login?_method=DELETE")
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert client.get("/_test/session").json() == {}


class TestInMemoryDatabase:
    """The whole flow works when persistence is configured as :memory:."""

    @pytest.fixture
    def memory_client(self):
        from persistence.db import init_db, reset_db, set_db_path

        set_db_path(":memory:")
        init_db()
        application = create_application(AppConfig(secret_key="test-secret", secret_key_present=True))
        yield TestClient(application, follow_redirects=False)
        reset_db()

    def test_login_against_in_memory_store(self, memory_client):
        create_user("a@x.com", PASSWORD)

        response = _login(memory_client)
        assert response.status_code == 302
        assert response.headers["location"] == "/"

        page = memory_client.get("/about/me")
        assert page.status_code == 200
        assert "a@x.com" in page.text
