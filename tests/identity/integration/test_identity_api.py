"""Integration tests for account endpoints via TestClient."""

import inspect

import pytest
from identity.api.routes import login, login_admin
from identity.user.user import User
from protean import current_domain


def _user(email="ayesha@example.com"):
    return current_domain.repository_for(User).find_by_email(email)


class TestRegisterEndpoint:
    def test_register_sends_verification_link(self, client, email_channel, dispatcher):
        response = client.post("/api/users/register", json={"name": "Ayesha Khan", "email": "ayesha@example.com"})
        assert response.status_code == 201
        assert response.json()["success"] is True

        dispatcher.wait_idle(timeout=5)
        email = email_channel.sent_emails[0]
        assert email["to"] == "ayesha@example.com"
        assert f"verify-email?token={_user().verification_token}" in email["body"]

    def test_register_again_while_unverified(self, client):
        client.post("/api/users/register", json={"name": "Ayesha Khan", "email": "ayesha@example.com"})
        response = client.post("/api/users/register", json={"name": "Ayesha Khan", "email": "ayesha@example.com"})
        assert response.status_code == 200
        assert "not verified" in response.json()["msg"]

    def test_register_missing_fields(self, client):
        response = client.post("/api/users/register", json={"email": "ayesha@example.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "Name and email are required"


class TestVerificationEndpoints:
    def test_verify_email_redirects(self, client):
        client.post("/api/users/register", json={"name": "Ayesha Khan", "email": "ayesha@example.com"})
        token = _user().verification_token

        response = client.get("/api/users/verify-email", params={"token": token}, follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"].endswith(f"/set-password?token={token}")

    def test_verify_email_bad_token(self, client):
        response = client.get("/api/users/verify-email", params={"token": "bad"}, follow_redirects=False)
        assert response.status_code == 400

    def test_set_password_then_login(self, client):
        client.post("/api/users/register", json={"name": "Ayesha Khan", "email": "ayesha@example.com"})
        token = _user().verification_token

        response = client.post("/api/users/set-password", json={"token": token, "newPassword": "secret123"})
        assert response.status_code == 200

        login = client.post("/api/users/login", json={"email": "ayesha@example.com", "password": "secret123"})
        assert login.status_code == 200
        body = login.json()
        assert body["token"]
        assert body["user"]["email"] == "ayesha@example.com"
        assert "password_hash" not in body["user"]


class TestLoginEndpoint:
    def test_unverified_account_forbidden(self, client):
        client.post("/api/users/register", json={"name": "Ayesha Khan", "email": "ayesha@example.com"})
        response = client.post("/api/users/login", json={"email": "ayesha@example.com", "password": "whatever"})
        assert response.status_code == 403
        assert response.json()["message"] == "Please verify your email first."

    def test_bad_credentials(self, client, register_customer):
        register_customer()
        response = client.post("/api/users/login", json={"email": "ayesha@example.com", "password": "wrong-one"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid credentials"

    def test_successful_login_returns_token(self, client, register_customer):
        register_customer()
        response = client.post("/api/users/login", json={"email": "ayesha@example.com", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["token"]

    @pytest.mark.parametrize("handler", [login, login_admin])
    def test_password_checks_run_off_the_event_loop(self, handler):
        assert not inspect.iscoroutinefunction(handler)


class TestPasswordResetEndpoints:
    def test_forgot_password_for_unknown_email_still_succeeds(self, client, email_channel, dispatcher):
        response = client.post("/api/users/forgot-password", json={"email": "nobody@example.com"})
        dispatcher.wait_idle(timeout=5)
        assert response.status_code == 200
        assert email_channel.sent_emails == []

    def test_reset_password_flow(self, client, register_customer, email_channel, dispatcher):
        register_customer()
        client.post("/api/users/forgot-password", json={"email": "ayesha@example.com"})
        dispatcher.wait_idle(timeout=5)
        token = _user().reset_password_token
        assert f"reset-password?token={token}" in email_channel.sent_emails[0]["body"]

        response = client.post("/api/users/reset-password", json={"token": token, "newPassword": "fresh-pass"})
        assert response.status_code == 200

        login = client.post("/api/users/login", json={"email": "ayesha@example.com", "password": "fresh-pass"})
        assert login.status_code == 200


class TestProfileEndpoint:
    def test_profile(self, client, customer_headers):
        response = client.get("/api/users/profile", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Ayesha Khan"

    def test_profile_requires_token(self, client):
        assert client.get("/api/users/profile").status_code == 401


class TestAdminEndpoints:
    def test_register_returns_token(self, client):
        response = client.post(
            "/api/admin/register",
            json={"name": "Store Admin", "email": "admin@theordnery.com", "password": "admin-pass"},
        )
        assert response.status_code == 201
        assert response.json()["admin"]["email"] == "admin@theordnery.com"
        assert response.json()["token"]

    def test_duplicate_admin(self, client, admin_headers):
        response = client.post(
            "/api/admin/register",
            json={"name": "Store Admin", "email": "admin@theordnery.com", "password": "admin-pass"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Admin already exists"

    def test_admin_login(self, client, admin_headers):
        response = client.post("/api/admin/login", json={"email": "admin@theordnery.com", "password": "admin-pass"})
        assert response.status_code == 200
        assert response.json()["admin"]["name"] == "Store Admin"

    def test_users_listing_is_admin_only(self, client, customer_headers, admin_headers):
        assert client.get("/api/admin/users", headers=customer_headers).status_code == 403

        response = client.get("/api/admin/users", headers=admin_headers)
        assert response.status_code == 200
        users = response.json()["users"]
        assert [u["email"] for u in users] == ["ayesha@example.com"]
        assert "password_hash" not in users[0]
