"""
Portal token helpers.

Tokens are issued by the central sign-in and carry
``{userId, email, roles[], exp}``.  Services only verify them; the
``create_access_token`` helper exists for local development and tests.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from apogee.core.config import settings


@dataclass(frozen=True)
class Principal:
    """Caller identity attached to ``request.state.principal``."""

    user_id: str | None
    email: str | None = None
    roles: tuple[str, ...] = field(default_factory=tuple)
    is_service: bool = False

    def has_any_role(self, allowed: frozenset[str]) -> bool:
        return self.is_service or any(role in allowed for role in self.roles)


SERVICE_PRINCIPAL = Principal(user_id=None, email=None, roles=(), is_service=True)


def create_access_token(
    claims: dict[str, Any],
    expires_minutes: int | None = None,
) -> str:
    """Sign a portal token with an ``exp`` claim."""
    payload = dict(claims)
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Verify signature and expiry. Returns None when the token is invalid."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.InvalidTokenError:
        return None


def principal_from_claims(claims: dict[str, Any]) -> Principal:
    roles = claims.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    user_id = claims.get("userId")
    return Principal(
        user_id=str(user_id) if user_id is not None else None,
        email=claims.get("email"),
        roles=tuple(str(role) for role in roles),
    )


def is_valid_service_key(candidate: str | None) -> bool:
    """Constant-time comparison against the shared internal service key."""
    if not candidate or not settings.INTERNAL_SERVICE_KEY:
        return False
    return hmac.compare_digest(candidate, settings.INTERNAL_SERVICE_KEY)
