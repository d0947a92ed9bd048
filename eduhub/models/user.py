import enum
from typing import Optional

from .base import Record


class UserRole(str, enum.Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    SCHOOL = "school"


class User(Record):
    email: str
    password: str  # bcrypt hash, never returned by the API
    full_name: str
    phone: str
    role: UserRole
    profile_picture: Optional[str] = None

    # Role-specific fields
    school_name: Optional[str] = None
    age: Optional[int] = None
    grade: Optional[str] = None
    address: Optional[str] = None
    teaching_grades: Optional[str] = None
    ceo_name: Optional[str] = None

    is_demo: bool = False
