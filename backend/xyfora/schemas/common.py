"""
XYFORA Backend — Shared Schemas
================================

Base models and the response shapes shared by every router.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """
    Base for request bodies: unknown fields are rejected, so a typo such as
    `{"titel": ...}` fails with 400 instead of being silently ignored.
    """

    model_config = ConfigDict(extra="forbid")


class ResponseModel(BaseModel):
    """
    Base for response bodies: built from ORM objects and serialized with
    camelCase keys (author_id → authorId).
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "forbidden",
            "message": "You can only modify your own products",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
