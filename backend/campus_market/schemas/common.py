"""
Campus Market Backend: Shared Schemas
=======================================

What:  Base model for camelCase wire names plus the response bodies shared
       by several routes (errors, success flags, uploads, health).

Wire format:
    Python attributes are snake_case; JSON on the wire and in the stored
    documents is camelCase ("createdAt", "specialDays", "pollId").
    CamelModel accepts both spellings on input and FastAPI serializes by
    alias on output.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every 4xx/5xx response.

    Example:
        {
            "error": "Title and body are required.",
            "details": "missing: body",
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Human-readable error message")
    details: Optional[str] = Field(default=None, description="Underlying cause, when available")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class SuccessResponse(BaseModel):
    success: bool = Field(default=True)


class UploadResponse(BaseModel):
    url: str = Field(description="Public path of the stored image, e.g. /uploads/<name>")


class HealthResponse(BaseModel):
    """
    What:  Health check body.
    Who:   Returned by GET /health for container and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    data_dir: str = Field(description="Data directory status: writable, unavailable")
    upload_dir: str = Field(description="Upload directory status: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
