from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
import re

from eduhub.models import UserRole


# ============================================================
# Request Schemas (What client sends)
# ============================================================

class UserRegister(BaseModel):
    """Schema for user registration request"""

    email: EmailStr  # Pydantic validates this is a valid email
    password: str = Field(
        min_length=8,
        max_length=100,
        description="Password must be 8-100 characters"
    )
    full_name: str = Field(
        min_length=2,
        max_length=100,
        description="Full name must be 2-100 characters"
    )
    phone: str = Field(
        min_length=5,
        max_length=30,
        description="Phone number used for account verification"
    )
    role: UserRole

    # Role-specific fields
    school_name: Optional[str] = Field(None, max_length=200)
    age: Optional[int] = Field(None, ge=3, le=120)
    grade: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=300)
    teaching_grades: Optional[str] = Field(None, max_length=200)
    ceo_name: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """
        Validate password meets strength requirements.

        Requirements:
        - At least 8 characters (already checked by min_length)
        - At least one letter
        - At least one digit
        """
        if not re.search(r"[A-Za-z]", v):
            raise ValueError("Password must contain at least one letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        return v

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        """Remove extra whitespace from name"""
        return " ".join(v.split())

    class Config:
        json_schema_extra = {
            "example": {
                "email": "student@school.edu",
                "password": "SecurePass123",
                "full_name": "Abebe Kebede",
                "phone": "+251911000000",
                "role": "student",
                "school_name": "Bole High School",
                "age": 16,
                "grade": "10th"
            }
        }


class UserLogin(BaseModel):
    """Schema for user login request"""

    email: EmailStr
    password: str

    class Config:
        json_schema_extra = {
            "example": {
                "email": "student@school.edu",
                "password": "SecurePass123"
            }
        }


class DemoRequest(BaseModel):
    """Schema for starting a demo session"""

    role: UserRole

    class Config:
        json_schema_extra = {
            "example": {
                "role": "teacher"
            }
        }


class UserUpdate(BaseModel):
    """
    Schema for updating the current user's profile.

    Email and role cannot be changed. Optional profile fields may be
    cleared with null; full_name and phone may not.
    """
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, min_length=5, max_length=30)
    profile_picture: Optional[str] = Field(None, max_length=500)
    school_name: Optional[str] = Field(None, max_length=200)
    age: Optional[int] = Field(None, ge=3, le=120)
    grade: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=300)
    teaching_grades: Optional[str] = Field(None, max_length=200)
    ceo_name: Optional[str] = Field(None, max_length=100)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("full_name cannot be null")
        v = " ".join(v.split())
        if not v:
            raise ValueError("full_name cannot be empty")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("phone cannot be null")
        return v


# ============================================================
# Response Schemas (What server sends back)
# ============================================================

class MessageResponse(BaseModel):
    """Schema for simple message responses"""
    message: str
    success: bool = True

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Logged out successfully",
                "success": True
            }
        }


class UserResponse(BaseModel):
    """Schema for user data in responses (NO password!)"""

    id: int
    email: str
    full_name: str
    phone: str
    role: UserRole
    profile_picture: Optional[str] = None
    school_name: Optional[str] = None
    age: Optional[int] = None
    grade: Optional[str] = None
    address: Optional[str] = None
    teaching_grades: Optional[str] = None
    ceo_name: Optional[str] = None
    is_demo: bool = False
    created_at: datetime

    class Config:
        from_attributes = True  # Allow creating from stored records


class TokenResponse(BaseModel):
    """Schema for authentication token response"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until the session ends
    is_demo: bool = False
    user: UserResponse

    class Config:
        json_schema_extra = {
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 600,
                "is_demo": True,
                "user": {
                    "id": 1,
                    "email": "demo_teacher_1700000000000@eduhub.com",
                    "full_name": "Demo Teacher",
                    "phone": "555-555-5555",
                    "role": "teacher",
                    "is_demo": True,
                    "created_at": "2024-01-01T00:00:00Z"
                }
            }
        }


class DemoStatusResponse(BaseModel):
    """Countdown state of a demo session"""

    time_left: int = Field(..., ge=0, description="Whole seconds until expiry")
    is_expiring: bool = Field(..., description="True once a minute or less remains")
    expired: bool = False


# ============================================================
# Error Schemas
# ============================================================

class ErrorResponse(BaseModel):
    """Schema for error responses"""

    detail: str

    class Config:
        json_schema_extra = {
            "example": {
                "detail": "Invalid email or password"
            }
        }
