# app/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from app.models.base import new_id, utcnow
from app.schemas.base import CamelModel


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(CamelModel):
    """Redacted view of a user. Carries no password material."""

    id: str
    email: str
    name: str
    role: Role
    created_at: datetime
    last_login: Optional[datetime] = None


@dataclass
class UserRecord:
    """Stored user. Only the auth store ever holds one of these."""

    email: str
    hashed_password: str
    name: str
    role: Role = Role.USER
    id: str = field(default_factory=lambda: new_id("usr"))
    created_at: datetime = field(default_factory=utcnow)
    last_login: Optional[datetime] = None

    def redacted(self) -> User:
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            role=self.role,
            created_at=self.created_at,
            last_login=self.last_login,
        )


@dataclass
class Session:
    user_id: str
    token: str
    expires_at: datetime
    id: str = field(default_factory=lambda: new_id("ses"))
    created_at: datetime = field(default_factory=utcnow)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
