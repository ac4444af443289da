"""
Blog API Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between the static client
       and the backend, plus the explicit field-validation step.
How:   Request bodies are parsed leniently into BlogInput (every field
       optional) so that missing fields produce the API's own 400 envelope
       instead of FastAPI's 422. `validate_blog_fields` then applies the
       ordered presence checks and returns a typed BlogFields.

Envelope:
    Every response is `{success, message, data?, count?, error?}`.
    Optional keys are left out of the JSON when unset.

Wire names:
    The client reads `_id`, `createdAt` and `updatedAt`; BlogOut exposes
    those as aliases of `id`, `created_at` and `updated_at`.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_api.exceptions import InvalidIdError, ValidationError
from blog_api.models.blog import DEFAULT_AUTHOR, is_valid_blog_id


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BlogInput(BaseModel):
    """Raw body of POST /blogs and PUT /blogs/{id}."""

    title: Optional[str] = Field(default=None, description="Post title (required)")
    body: Optional[str] = Field(default=None, description="Post body (required)")
    author: Optional[str] = Field(default=None, description="Author name (default: Anonymous)")

    # {"title": 123} is stored as "123"
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class BlogFields(BaseModel):
    """
    Validated, normalized field set handed to the persistence layer.

    title is trimmed, body is kept verbatim, author is trimmed and falls
    back to "Anonymous" when empty.
    """

    title: str
    body: str
    author: str = DEFAULT_AUTHOR

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("body")
    @classmethod
    def _require_body(cls, v: str) -> str:
        if not v:
            raise ValueError("body must not be empty")
        return v

    @field_validator("author")
    @classmethod
    def _default_author(cls, v: str) -> str:
        return v.strip() or DEFAULT_AUTHOR


def validate_blog_fields(payload: BlogInput) -> BlogFields:
    """
    Apply the create/update presence checks in order: title, then body.

    Raises:
        ValidationError: the first missing or empty required field.
    """
    if not payload.title or not payload.title.strip():
        raise ValidationError(message="Title is required field", field="title")
    if not payload.body:
        raise ValidationError(message="Body is required field", field="body")

    return BlogFields(
        title=payload.title,
        body=payload.body,
        author=payload.author or DEFAULT_AUTHOR,
    )


def parse_blog_id(value: str) -> str:
    """
    Check a path id against the identifier format and normalize its case.

    Raises:
        InvalidIdError: value is not 24 hex characters.
    """
    if not is_valid_blog_id(value):
        raise InvalidIdError(blog_id=value)
    return value.lower()


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BlogOut(BaseModel):
    """A stored blog post as returned to clients."""

    id: str = Field(alias="_id", description="24-character hex identifier")
    title: str
    body: str
    author: str
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC)")
    updated_at: datetime = Field(alias="updatedAt", description="Last update time (UTC)")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is written as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class BlogEnvelope(BaseModel):
    """Envelope carrying a single post."""

    success: bool = True
    message: str
    data: Optional[BlogOut] = None
    error: Optional[str] = None


class BlogListEnvelope(BaseModel):
    """Envelope carrying every post plus the count."""

    success: bool = True
    message: str
    count: int
    data: List[BlogOut]
    error: Optional[str] = None


class ErrorEnvelope(BaseModel):
    """
    Envelope returned for every failure.

    Example:
        {
            "success": false,
            "error": "Invalid ID",
            "message": "The provided blog ID is not valid"
        }
    """

    success: bool = False
    error: str = Field(description="Error category, e.g. 'Validation failed'")
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
