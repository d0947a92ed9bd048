from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from eduhub.models import ResourceType
from eduhub.schemas.auth import UserResponse


class ResourceCreate(BaseModel):
    """Schema for sharing a book, worksheet or video in the library."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    type: ResourceType
    url: str = Field(..., min_length=1, max_length=1000)

    @field_validator("title")
    @classmethod
    def normalize_title(cls, value: str) -> str:
        normalized = " ".join(value.split())
        if not normalized:
            raise ValueError("Title cannot be empty")
        return normalized

    @field_validator("description")
    @classmethod
    def normalize_description(cls, value: Optional[str]) -> Optional[str]:
        """Trim description; treat empty strings as None."""
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Intro to Fractions",
                "description": "Video lesson for grade 5",
                "type": "video",
                "url": "https://videos.example.com/fractions"
            }
        }


class ResourceResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    type: ResourceType
    url: str
    created_at: datetime

    class Config:
        from_attributes = True


class ResourceWithUserResponse(ResourceResponse):
    user: Optional[UserResponse] = None
