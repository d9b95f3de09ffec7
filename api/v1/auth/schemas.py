from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional

from models.user import UserRole

# -----------------------------
#  Registration / Login
# -----------------------------

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.member

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, value):
        if value != value.strip():
            raise ValueError("Username cannot start or end with whitespace")
        return value

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, value):
        if not value.strip():
            raise ValueError("Name is required")
        return value.strip()


class LoginRequest(BaseModel):
    username: str
    password: str

# -----------------------------
#  Users
# -----------------------------

class UserPublic(BaseModel):
    id: int
    username: str
    name: str
    email: EmailStr
    role: UserRole
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic
