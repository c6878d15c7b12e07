"""User request/response schemas - registration, login and profile projections."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from marketplace.schemas.common import SuccessResponse


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    # bcrypt accepts max 72 bytes; longer passwords are rejected up front.
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(BaseModel):
    # Empty values are answered with a 400 by the handler, not a schema error
    email: str = ""
    password: str = ""


class UserPublic(BaseModel):
    """What register/login hand back next to the token."""

    id: int
    username: str
    email: str
    avatar: str

    model_config = {"from_attributes": True}


class UserProfile(UserPublic):
    bio: str
    location: str
    rating: float
    review_count: int
    created_at: datetime


class AuthResponse(SuccessResponse):
    token: str
    user: UserPublic


class MeResponse(SuccessResponse):
    user: UserProfile
