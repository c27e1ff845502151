"""
Domain-specific exception hierarchy shared by all services.

Every business failure inherits from PortalError so routes and exception
handlers can catch broadly or narrowly.  Each exception carries the
entity name and identifier it concerns, plus optional structured details,
for the JSON error body and for logging.
"""

from __future__ import annotations

from typing import Any


class PortalError(Exception):
    """Base exception for all portal errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        entity_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.entity = entity
        self.entity_id = entity_id
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise for the JSON error response."""
        body: dict[str, Any] = {
            "error": type(self).__name__,
            "message": self.message,
        }
        if self.entity is not None:
            body["entity"] = self.entity
        if self.entity_id is not None:
            body["id"] = self.entity_id
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(PortalError):
    """A row looked up by id does not exist."""

    status_code = 404


class ValidationError(PortalError):
    """Missing/malformed input or a violated business rule."""

    status_code = 400


class ConflictError(PortalError):
    """Unique-constraint violation or a delete blocked by references."""

    status_code = 409


class InvalidStateError(PortalError):
    """The target row is not in a state that allows the operation."""

    status_code = 409


class UpstreamError(PortalError):
    """A collaborator service was unreachable or answered non-2xx."""

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        upstream_status: int | None = None,
        response_body: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.upstream_status = upstream_status
        self.response_body = response_body
        super().__init__(message, **kwargs)
        if upstream_status is not None:
            self.details.setdefault("upstream_status", upstream_status)
