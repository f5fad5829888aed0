from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from jobboard.models import Role
from .common import NonEmptyStr, OptionalText


# 1. For Registration (Input)
class UserCreate(BaseModel):
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role
    company: OptionalText = Field(None, validate_default=True)
    location: OptionalText = None
    bio: OptionalText = None

    @field_validator("company")
    @classmethod
    def company_required_for_employers(cls, value, info: ValidationInfo):
        if info.data.get("role") is Role.EMPLOYER and not value:
            raise ValueError("Company name is required for employers")
        return value


# 2. For Login (Input)
class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


# 3. For Updating Profile (Input). Role is deliberately absent: it never changes.
class UserProfileUpdate(BaseModel):
    name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    company: OptionalText = None
    location: OptionalText = None
    bio: OptionalText = None

    @field_validator("name")
    @classmethod
    def name_cannot_be_cleared(cls, value):
        # Omit the key to leave the name alone; an explicit null is an error
        if value is None:
            raise ValueError("Name is required")
        return value


# 4. For Responses (Output)
class UserResponse(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: Role
    company: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthResponse(UserResponse):
    token: str
