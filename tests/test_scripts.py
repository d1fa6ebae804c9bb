"""Tests for the create_user and seed scripts against an in-memory database."""

import unittest
from unittest.mock import patch

from api_support import ApiTestCase

from app.models import Template, User
from app.scripts import create_user, seed


class TestCreateUserScript(ApiTestCase):
    def run_script(self, *argv: str) -> int:
        with patch.object(create_user, "SessionLocal", self.SessionTesting):
            return create_user.main(list(argv))

    def test_creates_admin(self) -> None:
        code = self.run_script("root", "root@example.com", "long-enough-pw", "admin")
        self.assertEqual(code, 0)
        db = self.session()
        try:
            user = db.query(User).filter(User.username == "root").one()
            self.assertEqual(user.role, "admin")
            self.assertTrue(user.check_password("long-enough-pw"))
        finally:
            db.close()

    def test_rejects_short_password_and_duplicates(self) -> None:
        self.assertEqual(self.run_script("root", "root@example.com", "short"), 1)
        self.assertEqual(self.run_script("root", "root@example.com", "long-enough-pw"), 0)
        self.assertEqual(self.run_script("root", "other@example.com", "long-enough-pw"), 1)

    def test_rejects_malformed_email(self) -> None:
        for email in ("root@localhost", "@example.com", "root@", "root@exa mple.com", "a@b@c.com"):
            self.assertEqual(self.run_script("root", email, "long-enough-pw"), 1, email)
        db = self.session()
        try:
            self.assertEqual(db.query(User).count(), 0)
        finally:
            db.close()

    def test_stores_normalized_email(self) -> None:
        self.assertEqual(self.run_script("root", "Root@Example.COM", "long-enough-pw"), 0)
        db = self.session()
        try:
            self.assertEqual(db.query(User).one().email, "root@example.com")
        finally:
            db.close()


class TestSeed(ApiTestCase):
    def test_seed_is_idempotent(self) -> None:
        db = self.session()
        try:
            self.assertEqual(seed.seed(db), (True, True))
            db.commit()
            self.assertEqual(seed.seed(db), (False, False))
            db.commit()
            admin = db.query(User).one()
            self.assertEqual(admin.role, "admin")
            self.assertTrue(admin.is_verified)
            template = db.query(Template).one()
            self.assertEqual(template.components, {"header": True, "footer": True, "sidebar": False})
        finally:
            db.close()


if __name__ == "__main__":
    unittest.main()
