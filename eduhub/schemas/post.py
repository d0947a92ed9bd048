from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from eduhub.models import MediaType, PostType
from eduhub.schemas.auth import UserResponse


# ============================================================
# Request Schemas (What client sends)
# ============================================================

class PostCreate(BaseModel):
    """Schema for creating a post."""

    content: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Post text"
    )
    media_url: Optional[str] = Field(
        None,
        max_length=1000,
        description="URL of an uploaded image, video or document"
    )
    media_type: Optional[MediaType] = None
    post_type: PostType = Field(
        default=PostType.REGULAR,
        description="regular, book_worksheet or video"
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Post content cannot be empty")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "content": "Grade 10 algebra worksheet, answers on page 4",
                "media_url": "https://cdn.example.com/algebra.pdf",
                "media_type": "document",
                "post_type": "book_worksheet"
            }
        }


class PostUpdate(BaseModel):
    """Schema for editing a post. Only provided fields change."""

    content: Optional[str] = Field(None, min_length=1, max_length=5000)
    media_url: Optional[str] = Field(None, max_length=1000)
    media_type: Optional[MediaType] = None
    post_type: Optional[PostType] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: Optional[str]) -> str:
        # Omitting the field keeps the content; an explicit null is refused
        if v is None:
            raise ValueError("Post content cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("Post content cannot be empty")
        return v

    @field_validator("post_type")
    @classmethod
    def validate_post_type(cls, v: Optional[PostType]) -> PostType:
        if v is None:
            raise ValueError("post_type cannot be null")
        return v


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    content: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v


# ============================================================
# Response Schemas (What server sends back)
# ============================================================

class PostResponse(BaseModel):
    id: int
    user_id: int
    content: str
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None
    post_type: PostType
    created_at: datetime

    class Config:
        from_attributes = True


class PostWithUserResponse(PostResponse):
    """A feed entry: the post, its author and engagement counters."""

    user: Optional[UserResponse] = None
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    liked: Optional[bool] = Field(
        None,
        description="Whether the current user liked the post (omitted when anonymous)"
    )


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


class CommentWithUserResponse(CommentResponse):
    user: Optional[UserResponse] = None


class PostDetailResponse(PostWithUserResponse):
    comments: List[CommentWithUserResponse] = Field(default_factory=list)


class LikeStatusResponse(BaseModel):
    liked: bool
    likes_count: int
