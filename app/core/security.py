"""Password hashing and bearer token issuance/verification."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.errors import (
    ExpiredTokenError,
    ForbiddenError,
    InvalidTokenError,
    NoTokenError,
)
from app.core.roles import Role

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

DEFAULT_TOKEN_TTL = timedelta(hours=1)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class Identity:
    """Caller identity carried inside a bearer token."""

    id: str
    role: Role


@dataclass(frozen=True)
class TokenService:
    """
    Issues and verifies signed bearer tokens.

    The secret is passed in at construction so separate instances (e.g. in tests)
    can sign with separate keys. Tokens are stateless: there is no revocation,
    a token is valid until iat + ttl.
    """

    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = DEFAULT_TOKEN_TTL

    def issue(self, identity: Identity, now: datetime | None = None) -> str:
        """Return a signed token embedding {user: {id, role}}, iat and exp = iat + ttl."""
        issued_at = _as_utc(now)
        payload: dict[str, Any] = {
            "sub": identity.id,
            "user": {"id": identity.id, "role": Role(identity.role).value},
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(
        self,
        token: str | None,
        required_roles: Iterable[Role | str] | Role | str | None = None,
        now: datetime | None = None,
    ) -> Identity:
        """
        Check signature, expiry and role membership; return the embedded identity.

        Raises NoTokenError, InvalidTokenError, ExpiredTokenError or ForbiddenError.
        Expiry is checked against `now` only after the signature is known to be
        good, so a forged token never reports as expired.
        """
        if not token:
            raise NoTokenError()
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iat"],
                },
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e

        identity = _identity_from_payload(payload)

        exp = payload["exp"]
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError()
        current = _as_utc(now)
        if current.timestamp() >= exp:
            raise ExpiredTokenError()

        allowed = _role_values(required_roles)
        if allowed and identity.role.value not in allowed:
            raise ForbiddenError()
        return identity


def _as_utc(now: datetime | None) -> datetime:
    """Current UTC time when now is None; naive values are taken as UTC, as PyJWT does when encoding."""
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now


def _identity_from_payload(payload: dict[str, Any]) -> Identity:
    user = payload.get("user")
    if not isinstance(user, dict):
        raise InvalidTokenError()
    user_id = user.get("id")
    role = user.get("role")
    if not isinstance(user_id, str) or not user_id or not isinstance(role, str):
        raise InvalidTokenError()
    try:
        return Identity(id=user_id, role=Role(role))
    except ValueError as e:
        raise InvalidTokenError() from e


def _role_values(roles: Iterable[Role | str] | Role | str | None) -> frozenset[str]:
    if roles is None:
        return frozenset()
    if isinstance(roles, (Role, str)):
        roles = [roles]
    return frozenset(r.value if isinstance(r, Role) else str(r) for r in roles)
