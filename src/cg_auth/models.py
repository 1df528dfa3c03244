"""Domain models for cg_auth — pure dataclasses, no business logic."""

import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PublicUser:
    """User projection that is safe to hand to callers. Never has a password."""

    id: uuid.UUID
    name: str
    email: str
    role: str
    created_at: datetime


@dataclass(frozen=True)
class UserRecord:
    """Full stored row. `password` holds the bcrypt hash."""

    id: uuid.UUID
    name: str
    email: str
    password: str
    role: str
    created_at: datetime

    def to_public(self) -> PublicUser:
        return PublicUser(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )
