"""
Mflix API: Comment Request Schemas
==================================

What:  Request bodies for creating and updating comments.
Why:   Writes persist exactly what the client sent, after validation. Field
       names match the `sample_mflix.comments` documents so the stored shape
       is the one every existing comment already has.

Stored comment shape:
    {
        "_id": ObjectId, "name": str, "email": str,
        "movie_id": ObjectId, "text": str, "date": datetime
    }
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class MovieCommentCreate(BaseModel):
    """Body of POST /api/movies/{movie_id}/comments (movie comes from the path)."""

    name: str = Field(min_length=1, max_length=200, description="Commenter display name")
    email: str = Field(
        min_length=3,
        max_length=320,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Commenter email",
    )
    text: str = Field(min_length=1, max_length=10_000, description="Comment body")


class CommentCreate(MovieCommentCreate):
    """Body of POST /api/comments."""

    movie_id: str = Field(description="ObjectId (24 hex chars) of the commented movie")


class CommentUpdate(BaseModel):
    """
    Body of PUT /api/comments/{comment_id}.

    Partial: only supplied fields are `$set`. The comment's `date` is
    refreshed on every successful update.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    email: Optional[str] = Field(
        default=None, min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$"
    )
    text: Optional[str] = Field(default=None, min_length=1, max_length=10_000)

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
