"""
Blog API Backend: Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the JSON contract of the posts resource.
How:   FastAPI validates request bodies against these models before the
       route handler runs, so a malformed body never reaches the store.
       Failures surface as RequestValidationError and are rendered as 400.

Stored shape vs. representation:
    The store keeps author as {"firstName", "lastName"}; the API returns it
    as the single display string "firstName lastName" (BlogPostResponse).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps are taken as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AuthorName(BaseModel):
    """Author sub-document. Both parts are required."""

    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)

    model_config = {"populate_by_name": True}

    @field_validator("first_name", "last_name")
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    def to_document(self) -> Dict[str, str]:
        """Stored form: {"firstName": ..., "lastName": ...}."""
        return self.model_dump(by_alias=True)


class BlogPostCreate(BaseModel):
    """
    What:  Body of POST /posts.
    Rules: title, author and content are required and non-blank;
           created is optional and defaults to insert time in the model.
    """

    title: str = Field(min_length=1, description="Post title")
    author: AuthorName = Field(description="Author name parts")
    content: str = Field(min_length=1, description="Post body")
    created: Optional[datetime] = Field(
        default=None,
        description="Publication timestamp (ISO 8601); defaults to now",
    )

    @field_validator("title", "content")
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    # Stored as UTC wall-clock time; SQLite keeps no offset
    @field_validator("created")
    @classmethod
    def normalize_created(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)


class BlogPostUpdate(BaseModel):
    """
    What:  Body of PUT /posts/{id}.
    Rules: any subset of title, content, author; omitted fields are left
           unchanged. A supplied field may not be null. When `id` is sent
           it must match the path id (checked by the service).
    """

    id: Optional[uuid.UUID] = Field(default=None, description="Must equal the path id if present")
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    author: Optional[AuthorName] = None

    @field_validator("title", "content")
    @classmethod
    def check_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "BlogPostUpdate":
        for name in ("title", "content", "author"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"'{name}' may not be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Column values for the fields the client actually sent."""
        updates: Dict[str, Any] = {}
        for name in ("title", "content", "author"):
            if name not in self.model_fields_set:
                continue
            value = getattr(self, name)
            updates[name] = value.to_document() if isinstance(value, AuthorName) else value
        return updates


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BlogPostResponse(BaseModel):
    """
    What:  External representation of a post.
    Who:   Returned by GET /posts (as array items), GET/POST/PUT on a single post.
    """

    id: uuid.UUID = Field(description="Store-assigned identifier")
    title: str
    author: str = Field(description='Display name, "firstName lastName"')
    content: str
    created: datetime

    @field_validator("created")
    @classmethod
    def attach_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @classmethod
    def from_model(cls, post: Any) -> "BlogPostResponse":
        return cls(
            id=post.id,
            title=post.title,
            author=post.author_name,
            content=post.content,
            created=post.created,
        )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "post with ID '0b4c...' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


