"""Closed set of user roles used for role-gated routes."""

from collections.abc import Iterable
from enum import Enum


class Role(str, Enum):
    """
    Roles a user can hold; stored as the plain string value.

    To add a role, add a member here. Routes can only be gated on members of
    this enum, so a misspelled role fails at import time instead of locking
    every caller out at request time.
    """

    ADMIN = "admin"
    USER = "user"


def normalize_roles(roles: "Role | str | Iterable[Role | str] | None") -> frozenset[Role]:
    """
    Turn a single role, an iterable of roles, or None into a frozenset of Role.

    Raises ValueError for names that are not Role members.
    """
    if roles is None:
        return frozenset()
    if isinstance(roles, (Role, str)):
        roles = [roles]
    normalized: set[Role] = set()
    for r in roles:
        try:
            normalized.add(Role(r))
        except ValueError as e:
            raise ValueError(
                f"Unknown role {r!r}; expected one of {', '.join(m.value for m in Role)}"
            ) from e
    return frozenset(normalized)
