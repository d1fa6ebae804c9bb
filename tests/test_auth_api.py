"""API tests for registration, login and the bearer-token gate."""

import unittest
import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from api_support import ApiTestCase

from app.core.roles import Role
from app.core.security import Identity, TokenService
from app.models import User
from app.services import users as user_service

PREFIX = "/api/v1"


class TestRegister(ApiTestCase):
    def test_register_creates_user_with_hashed_password(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": " bob ", "email": "Bob@Example.com", "password": "hunter2hunter2"},
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json(), {"message": "User registered successfully"})

        db = self.session()
        try:
            user = db.query(User).filter(User.username == "bob").one()
            self.assertEqual(user.email, "bob@example.com")
            self.assertEqual(user.role, "user")
            self.assertFalse(user.is_verified)
            self.assertEqual(user.failed_login_attempts, 0)
            self.assertNotEqual(user.password_hash, "hunter2hunter2")
            self.assertTrue(user.check_password("hunter2hunter2"))
        finally:
            db.close()

    def test_validation_errors_are_listed(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "  ", "email": "not-an-email", "password": "short"},
        )
        self.assertEqual(resp.status_code, 400)
        errors = resp.json()["errors"]
        params = {e["param"] for e in errors}
        self.assertEqual(params, {"username", "email", "password"})
        self.assertIn("Username is required", [e["msg"] for e in errors])
        for e in errors:
            self.assertEqual(e["location"], "body")
            if e["param"] == "password":
                self.assertNotIn("value", e)

    def test_duplicate_username_and_email(self) -> None:
        self.create_user(username="alice", email="alice@example.com")
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "alice", "email": "other@example.com", "password": "password123"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"][0]["msg"], "Username already in use")

        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "other", "email": "alice@example.com", "password": "password123"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"][0]["msg"], "Email already in use")

    def test_username_taken_between_check_and_commit(self) -> None:
        check_user = user_service._ensure_user_free
        claimed: list[str] = []

        def check_then_claim(db, username, email):
            check_user(db, username, email)
            if not claimed:
                claimed.append(username)
                self.create_user(username=username, email="first@example.com")

        with patch.object(user_service, "_ensure_user_free", side_effect=check_then_claim):
            resp = self.client.post(
                f"{PREFIX}/auth/register",
                json={"username": "alice", "email": "alice@example.com", "password": "password123"},
            )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"][0]["msg"], "Username already in use")
        db = self.session()
        try:
            self.assertEqual(db.query(User).filter(User.username == "alice").count(), 1)
        finally:
            db.close()


class TestLogin(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.create_user(password="correct-horse", role=Role.ADMIN)

    def test_login_returns_token_for_identity(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/auth/login",
            json={"email": "alice@example.com", "password": "correct-horse"},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["token_type"], "bearer")
        identity = self.tokens.verify(body["token"])
        self.assertEqual(identity, Identity(id=self.user_id, role=Role.ADMIN))

    def test_wrong_password_and_unknown_email(self) -> None:
        for payload in (
            {"email": "alice@example.com", "password": "wrong-horse"},
            {"email": "nobody@example.com", "password": "correct-horse"},
        ):
            resp = self.client.post(f"{PREFIX}/auth/login", json=payload)
            self.assertEqual(resp.status_code, 401)
            self.assertEqual(resp.json(), {"errors": [{"msg": "Invalid email or password"}]})

    def test_soft_deleted_user_cannot_log_in(self) -> None:
        db = self.session()
        try:
            db.get(User, uuid.UUID(self.user_id)).soft_delete()
            db.commit()
        finally:
            db.close()
        resp = self.client.post(
            f"{PREFIX}/auth/login",
            json={"email": "alice@example.com", "password": "correct-horse"},
        )
        self.assertEqual(resp.status_code, 401)


class TestGate(ApiTestCase):
    """GET /auth/me and /auth/users exercise the gate end to end."""

    def test_missing_header_is_no_token(self) -> None:
        resp = self.client.get(f"{PREFIX}/auth/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "no_token")
        self.assertEqual(resp.json()["msg"], "No token, authorization denied")
        self.assertEqual(resp.headers["WWW-Authenticate"], "Bearer")

    def test_garbled_header_is_invalid_token(self) -> None:
        for header in ("Bearer garbage", "Token abc", "Bearer"):
            resp = self.client.get(f"{PREFIX}/auth/me", headers={"Authorization": header})
            self.assertEqual(resp.status_code, 401, header)
            self.assertEqual(resp.json()["code"], "invalid_token", header)

    def test_expired_token(self) -> None:
        token = self.tokens.issue(
            Identity(id="u1", role=Role.USER),
            now=datetime.now(UTC) - timedelta(hours=2),
        )
        resp = self.client.get(f"{PREFIX}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "expired_token")

    def test_token_from_other_secret(self) -> None:
        token = TokenService(secret="other").issue(Identity(id="u1", role=Role.ADMIN))
        resp = self.client.get(f"{PREFIX}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "invalid_token")

    def test_me_returns_identity(self) -> None:
        resp = self.client.get(f"{PREFIX}/auth/me", headers=self.auth_headers("u1", Role.USER))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"id": "u1", "role": "user"})

    def test_admin_route_forbids_user(self) -> None:
        resp = self.client.get(f"{PREFIX}/auth/users", headers=self.auth_headers("u1", Role.USER))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"msg": "Forbidden", "code": "forbidden"})

    def test_admin_lists_users(self) -> None:
        admin_id = self.create_user("root", "root@example.com", role=Role.ADMIN)
        self.create_user("alice", "alice@example.com")
        resp = self.client.get(f"{PREFIX}/auth/users", headers=self.auth_headers(admin_id, Role.ADMIN))
        self.assertEqual(resp.status_code, 200)
        users = resp.json()["users"]
        self.assertEqual({u["username"] for u in users}, {"root", "alice"})
        for u in users:
            self.assertNotIn("password_hash", u)


class TestDeleteUser(ApiTestCase):
    def test_admin_soft_deletes_user(self) -> None:
        admin_id = self.create_user("root", "root@example.com", role=Role.ADMIN)
        user_id = self.create_user("alice", "alice@example.com")
        headers = self.auth_headers(admin_id, Role.ADMIN)

        resp = self.client.delete(f"{PREFIX}/auth/users/{user_id}", headers=headers)
        self.assertEqual(resp.status_code, 204)

        db = self.session()
        try:
            row = db.query(User).filter(User.username == "alice").one()
            self.assertIsNotNone(row.deleted_at)
        finally:
            db.close()

        resp = self.client.delete(f"{PREFIX}/auth/users/{user_id}", headers=headers)
        self.assertEqual(resp.status_code, 404)

    def test_admin_cannot_delete_self(self) -> None:
        admin_id = self.create_user("root", "root@example.com", role=Role.ADMIN)
        resp = self.client.delete(
            f"{PREFIX}/auth/users/{admin_id}", headers=self.auth_headers(admin_id, Role.ADMIN)
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json(),
            {
                "errors": [
                    {
                        "msg": "Admins cannot delete their own account",
                        "location": "body",
                        "param": "user_id",
                    }
                ]
            },
        )


class TestRoot(ApiTestCase):
    def test_root_message(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.json(), {"message": "Welcome to the CMS Platform Backend!"})

    def test_health(self) -> None:
        resp = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
