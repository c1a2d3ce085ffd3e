"""
Scholarship Portal Backend — Shared Response Schemas
=====================================================

What:  Write acknowledgments, error and health payloads shared by all routes.
How:   Acknowledgments use camelCase on the wire (insertedId, matchedCount, ...)
       through an alias generator; FastAPI serializes response models by alias.

Example insert acknowledgment:
    {"acknowledged": true, "insertedId": "6f1c0c1e-2c9f-4c7e-9a43-6a6f9f8f1b11"}
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AcknowledgmentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InsertResult(AcknowledgmentModel):
    """Returned by every create endpoint."""
    acknowledged: bool = True
    inserted_id: str = Field(description="Identifier assigned to the new document")


class DuplicateInsertResult(AcknowledgmentModel):
    """Returned instead of InsertResult when the document already exists."""
    message: str = Field(description="Why nothing was inserted")
    inserted_id: None = None


class UpdateResult(AcknowledgmentModel):
    """Returned by update endpoints (cancel, feedback, scholarship upsert)."""
    acknowledged: bool = True
    matched_count: int = Field(description="Documents matching the id (0 or 1)")
    modified_count: int = Field(description="Documents whose values actually changed")
    upserted_count: int = Field(default=0, description="1 when the update inserted a new document")
    upserted_id: Optional[str] = Field(default=None, description="Id of the inserted document")


class DeleteResult(AcknowledgmentModel):
    acknowledged: bool = True
    deleted_count: int


class MessageResponse(BaseModel):
    message: str


def document_fields(payload: BaseModel) -> Dict[str, Any]:
    """
    Wire-keyed fields of a request body: explicitly sent fields plus any
    extra fields the schema allowed through.
    """
    fields = payload.model_dump(by_alias=True, exclude_unset=True)
    fields.update(payload.model_extra or {})
    return fields


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "user with ID '...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    payment_gateway: str = Field(
        description="Payment gateway status: configured, not_configured, circuit_open"
    )
    uptime_seconds: float = Field(description="Seconds since service started")
