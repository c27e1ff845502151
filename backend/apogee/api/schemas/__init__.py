"""API schema package."""

from apogee.api.schemas.common import APIModel, ErrorResponse, MessageResponse

__all__ = ["APIModel", "ErrorResponse", "MessageResponse"]
