"""Authorization gate: bearer token verification and role checks as FastAPI dependencies."""

from collections.abc import Callable, Iterable
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings
from app.core.errors import InvalidTokenError, NoTokenError
from app.core.roles import Role, normalize_roles
from app.core.security import Identity, TokenService

security = HTTPBearer(auto_error=False)


def build_token_service() -> TokenService:
    """TokenService configured from settings (secret, algorithm, TTL)."""
    s = get_settings()
    return TokenService(
        secret=s.JWT_SECRET.get_secret_value(),
        algorithm=s.JWT_ALGORITHM,
        ttl=timedelta(minutes=s.JWT_EXPIRE_MINUTES),
    )


@lru_cache
def get_token_service() -> TokenService:
    """Dependency returning the process-wide TokenService (override in tests)."""
    return build_token_service()


def require_roles(*roles: Role | str | Iterable[Role | str]) -> Callable[..., Identity]:
    """
    Build a dependency that authenticates the caller and enforces a role allow-list.

    require_roles() accepts any authenticated caller; require_roles(Role.ADMIN) or
    require_roles([Role.ADMIN, Role.USER]) restricts by role. Unknown role names
    raise ValueError here, when routes are declared.
    """
    flat: list[Role | str] = []
    for r in roles:
        if isinstance(r, (Role, str)):
            flat.append(r)
        else:
            flat.extend(r)
    allowed = normalize_roles(flat)

    def dependency(
        request: Request,
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
        tokens: Annotated[TokenService, Depends(get_token_service)],
    ) -> Identity:
        if credentials is None:
            # HTTPBearer yields None both for no header and for a non-bearer header.
            if request.headers.get("Authorization", "").strip():
                raise InvalidTokenError()
            raise NoTokenError()
        identity = tokens.verify(credentials.credentials, required_roles=allowed)
        request.state.identity = identity
        return identity

    return dependency


get_current_identity = require_roles()
require_admin = require_roles(Role.ADMIN)
