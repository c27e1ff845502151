"""Base schema and shared response shapes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """camelCase on the wire, snake_case in Python; readable from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(APIModel):
    message: str


class ErrorResponse(APIModel):
    """Body of every PortalError response."""

    error: str
    message: str
    entity: str | None = None
    id: int | str | None = None
    details: dict | None = None
