"""
Portal token middleware.

Every non-public request must carry a portal token whose ``roles`` claim
includes one of the service's allowed roles.  Calls from the other
services authenticate with the shared ``X-Service-Key`` header instead.

Token lookup order: ``?token=`` query parameter, the service cookie,
then ``Authorization: Bearer``.  A query-parameter token is swapped for
an HTTP-only cookie and the client is redirected to the same URL without
it.  Browser-facing failures answer with redirects:

    no token            → {PORTAL_URL}/auth/signin
    bad / expired token → {PORTAL_URL}/auth/signin (cookie cleared)
    no allowed role     → /unauthorized
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from apogee.clients.base import SERVICE_KEY_HEADER
from apogee.core.config import settings
from apogee.core.logging import get_logger
from apogee.core.security import (
    SERVICE_PRINCIPAL,
    decode_access_token,
    is_valid_service_key,
    principal_from_claims,
)

logger = get_logger(__name__)

TOKEN_QUERY_PARAM = "token"
UNAUTHORIZED_PATH = "/unauthorized"

# Paths that don't require authentication
PUBLIC_PATHS = {
    "/health",
    "/docs",
    "/docs/oauth2-redirect",
    "/openapi.json",
    "/redoc",
    UNAUTHORIZED_PATH,
}


def sign_in_url() -> str:
    return f"{settings.PORTAL_URL.rstrip('/')}/auth/signin"


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization")
    if header and header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return None


class PortalAuthMiddleware(BaseHTTPMiddleware):
    """Verify portal tokens / service keys and populate ``request.state.principal``."""

    def __init__(self, app: ASGIApp, *, allowed_roles: frozenset[str]) -> None:
        super().__init__(app)
        self.allowed_roles = allowed_roles

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if request.method == "OPTIONS" or path in PUBLIC_PATHS or path.startswith("/health"):
            return await call_next(request)

        if path.startswith("/api/") and is_valid_service_key(request.headers.get(SERVICE_KEY_HEADER)):
            request.state.principal = SERVICE_PRINCIPAL
            return await call_next(request)

        query_token = request.query_params.get(TOKEN_QUERY_PARAM)
        token = query_token or request.cookies.get(settings.SERVICE_TOKEN_COOKIE) or _bearer_token(request)

        if not token:
            logger.info("Missing token, redirecting to sign-in", path=path)
            return RedirectResponse(sign_in_url())

        claims = decode_access_token(token)
        if claims is None:
            logger.warning("Invalid token, redirecting to sign-in", path=path)
            response = RedirectResponse(sign_in_url())
            response.delete_cookie(settings.SERVICE_TOKEN_COOKIE, path="/")
            return response

        principal = principal_from_claims(claims)
        if not principal.has_any_role(self.allowed_roles):
            logger.warning(
                "Role not allowed",
                path=path,
                user_id=principal.user_id,
                roles=list(principal.roles),
            )
            return RedirectResponse(UNAUTHORIZED_PATH)

        if query_token:
            clean_url = request.url.remove_query_params(TOKEN_QUERY_PARAM)
            response = RedirectResponse(str(clean_url))
            response.set_cookie(
                settings.SERVICE_TOKEN_COOKIE,
                query_token,
                max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
                path="/",
                httponly=True,
                secure=settings.APP_ENV == "production",
                samesite="lax",
            )
            return response

        request.state.principal = principal
        return await call_next(request)
