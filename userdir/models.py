"""Domain models for the user directory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserFields:
    """Validated, trimmed values submitted for a user."""

    first_name: str
    last_name: str
    email: str
    age: Optional[int] = None
    bio: Optional[str] = None


@dataclass(frozen=True)
class User:
    """Represents a user record held by the store."""

    id: int
    first_name: str
    last_name: str
    email: str
    age: Optional[int]
    bio: Optional[str]

    @classmethod
    def from_fields(cls, user_id: int, fields: UserFields) -> "User":
        return cls(
            id=user_id,
            first_name=fields.first_name,
            last_name=fields.last_name,
            email=fields.email,
            age=fields.age,
            bio=fields.bio,
        )


__all__ = ["User", "UserFields"]
