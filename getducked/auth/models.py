from __future__ import annotations

from pydantic import BaseModel, Field

from getducked.common import User


class RegisterRequest(BaseModel):
    email: str | None = Field(default=None, description="User email address")
    password: str | None = Field(
        default=None,
        description="User password (minimum 8 characters)",
    )


class LoginRequest(BaseModel):
    email: str | None = Field(default=None, description="User email address")
    password: str | None = Field(default=None, description="User password")


class UserResponse(BaseModel):
    id: str
    email: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(id=user.id, email=user.email, role=user.role)


class AuthResponse(BaseModel):
    token: str = Field(description="JWT authentication token")
    user: UserResponse


class ErrorResponse(BaseModel):
    error: str
    code: str
    field: str | None = None
