"""Schemas shared by the profile and post routes."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response (see api.exception_handlers)."""

    error_code: str = Field(..., examples=["POST_NOT_FOUND"])
    message: str = Field(..., examples=["Post not found"])
    details: Any | None = None


class MessageResponse(BaseModel):
    """Confirmation returned by delete endpoints."""

    message: str = Field(..., examples=["Post removed"])


# OpenAPI documentation for failures shared by every authenticated route
AUTH_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
}
