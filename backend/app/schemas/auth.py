# app/schemas/auth.py
from typing import List

from pydantic import Field, field_validator

from app.models.user import Role, User
from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value):
        # Passwords are taken verbatim
        return value.strip() if isinstance(value, str) else value


class RegisterRequest(LoginRequest):
    name: str = Field(min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class CreateUserRequest(RegisterRequest):
    role: Role = Role.USER


class AuthResponse(CamelModel):
    success: bool = True
    user: User
    token: str


class MeResponse(CamelModel):
    success: bool = True
    user: User


class UserListMetadata(CamelModel):
    total: int


class UserListResponse(CamelModel):
    success: bool = True
    data: List[User]
    metadata: UserListMetadata


class UserResponse(CamelModel):
    success: bool = True
    data: User
