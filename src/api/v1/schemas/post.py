"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    text: str = Field(..., min_length=1, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    text: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(BaseModel):
    """Schema for a like."""

    model_config = ConfigDict(from_attributes=True)

    user: UUID


class CommentResponse(BaseModel):
    """Schema for a comment."""

    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str | None
    date: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": "456e4567-e89b-12d3-a456-426614174000",
                "name": "Jane Dev",
                "avatar": "https://example.com/jane.png",
                "text": "Shipped the new profile page today",
                "date": "2026-01-28T10:00:00",
                "likes": [{"user": "789e4567-e89b-12d3-a456-426614174000"}],
                "comments": [],
            }
        },
    )

    id: UUID
    user: UUID
    name: str
    avatar: str | None
    text: str
    date: datetime
    likes: list[LikeResponse] = []
    comments: list[CommentResponse] = []


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class LikeListResponse(BaseModel):
    """Schema for the likes of a Post."""

    data: list[LikeResponse]


class CommentListResponse(BaseModel):
    """Schema for the comments of a Post."""

    data: list[CommentResponse]
