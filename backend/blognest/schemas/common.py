"""
BlogNest Backend — Shared Response Schemas
============================================

What:  The uniform response envelope and the error/health response models.
How:   Every endpoint's response model subclasses Envelope, adding its own
       payload fields next to `success` and `message`.

Envelope shape:
    {"success": true,  "message": "...", ...payload}
    {"success": false, "message": "...", "error": "not_found", "details": {...}, "request_id": "..."}
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(CamelModel):
    """Fields shared by every success response."""

    success: bool = Field(default=True, description="Whether the operation succeeded")
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    Envelope returned for every failed request.

    Fields:
        error: Machine-readable error kind (e.g., "validation_error", "not_found")
        details: Optional extra context (e.g., which fields failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error description")
    error: str = Field(description="Machine-readable error kind")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
