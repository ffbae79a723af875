"""
Users API - Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the API contract of the users endpoints.
Why:   Automatic decoding of request bodies, serialization of responses and
       OpenAPI doc generation.
How:   FastAPI validates request bodies against these models and serializes
       return values through `response_model` (by alias, so the wire format
       uses camelCase field names).

Wire format:
    {"id": "65a4f0c2e4b0a1b2c3d4e5f6", "firstName": "Ada", "lastName": "Lovelace"}

Validation is structural only: strings must be strings. There are no length,
format or required-field rules.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """
    What:  Body of POST /api/v1/users.

    An `id` in the body is ignored (unknown fields are dropped); MongoDB
    assigns the identifier on insert.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")


class UserUpdate(BaseModel):
    """
    What:  Body of PUT /api/v1/users/{id}, a partial update.

    Only fields present in the body are written. `{"firstName": "X"}` leaves
    lastName untouched; an explicit null is treated the same as absence.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")

    def to_set_fields(self) -> Dict[str, Any]:
        """The `$set` payload, keyed by stored field names."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """
    What:  External representation of a stored user.
    Who:   Returned by GET /api/v1/users (as array items) and PUT.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Store-assigned identifier (24-character hex)")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")


class InsertResult(BaseModel):
    """What:  Insert acknowledgement returned by POST /api/v1/users."""

    model_config = ConfigDict(populate_by_name=True)

    inserted_id: str = Field(alias="insertedId", description="Identifier of the new user")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "user with ID '65a4f0c2e4b0a1b2c3d4e5f6' was not found",
            "details": null,
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """What:  Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
