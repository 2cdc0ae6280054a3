"""Comment-related Pydantic schemas."""

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Payload for a new comment."""

    body: str = Field(..., min_length=1, description="Comment text")
