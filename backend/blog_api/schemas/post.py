"""
Blog API — Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the API contract for the posts resource.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.

Design Decision:
    Schemas are separate from the BlogPost document model because the API
    exposes `id` as a hex string while storage keeps `_id` as an ObjectId.
"""

from typing import Optional

from pydantic import BaseModel, Field

from blog_api.models.post import BlogPost


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class PostPayload(BaseModel):
    """
    Body of POST /posts and PUT /posts/{id}.

    Both fields are required. Empty strings are accepted; no length limits
    are enforced.
    """
    title: str = Field(description="Post title")
    content: str = Field(description="Post body text")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """A stored blog post as returned by create, get-one and get-all."""
    id: str = Field(description="Unique post identifier (24-char hex ObjectId)")
    title: str = Field(description="Post title")
    content: str = Field(description="Post body text")

    @classmethod
    def from_post(cls, post: BlogPost) -> "PostResponse":
        return cls(id=post.hex_id, title=post.title, content=post.content)


class MessageResponse(BaseModel):
    """Confirmation returned by update and delete."""
    message: str = Field(description="Human-readable confirmation")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Blog post not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
