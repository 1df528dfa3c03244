"""Pydantic request/response schemas for the auth endpoints.

All responses are wrapped in ApiResponse at the router layer.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from src.cg_auth.models import PublicUser


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["user", "admin"] = "user"


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Outbound user; has no password field."""

    id: str
    name: str
    email: str
    role: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: PublicUser) -> "UserResponse":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )
