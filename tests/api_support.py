"""Shared test fixture: the FastAPI app wired to an in-memory SQLite database."""

import os
import unittest

os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.core.security as security
from app.api.deps import get_token_service
from app.core.database import get_db
from app.core.roles import Role
from app.core.security import Identity, TokenService
from app.main import app
from app.models import Base, User

# Fast hashes for tests.
security.BCRYPT_ROUNDS = 4

TEST_SECRET = "test-secret"


class ApiTestCase(unittest.TestCase):
    """Fresh database, token service and TestClient per test."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.tokens = TokenService(secret=TEST_SECRET)

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_token_service] = lambda: self.tokens
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def session(self) -> Session:
        return self.SessionTesting()

    def create_user(
        self,
        username: str = "alice",
        email: str = "alice@example.com",
        password: str = "correct-horse",
        role: Role = Role.USER,
    ) -> str:
        """Insert a user directly and return its id as a string."""
        db = self.session()
        try:
            user = User(username=username, email=email, role=role.value)
            user.password = password
            db.add(user)
            db.commit()
            return str(user.id)
        finally:
            db.close()

    def auth_headers(self, user_id: str, role: Role = Role.USER) -> dict[str, str]:
        token = self.tokens.issue(Identity(id=user_id, role=role))
        return {"Authorization": f"Bearer {token}"}
