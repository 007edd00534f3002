"""
Notebox Backend - Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the JSON contract with the browser front end.
How:   FastAPI validates request bodies against NoteInput before a handler
       runs and serializes responses through NoteResponse (camelCase keys).

Wire shape of a note:
    {"id": "...", "title": "...", "content": "...",
     "createdAt": "2024-01-15T12:00:00Z", "updatedAt": "2024-01-15T12:00:00Z"}
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    Both fields are required strings. A title must contain something other
    than whitespace; content may be empty. Unknown keys are ignored.
    """
    title: str = Field(description="Note title, any length")
    content: str = Field(description="Note body text")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note, as returned by every notes endpoint."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="Unique note identifier (UUID)")
    title: str
    content: str
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last update (UTC ISO 8601)")


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """
    Error body shared by all endpoints.

    Example:
        {"error": "Note not found", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[List[FieldError]] = Field(
        default=None, description="Per-field problems for validation errors"
    )
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Static liveness answer for GET /health."""
    status: str = Field(default="healthy", description="Always 'healthy' while the process serves")
