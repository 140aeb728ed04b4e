"""
# User Models

Fixed-shape records for registered users. The `email` field carries the uniqueness
invariant enforced by the `email_unique` index on the `users` collection.

`password_hash` is stored but excluded from serialization, so a `User` rendered by the
API never exposes it.
"""

from datetime import datetime, timezone
from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

USER_STATUS_ACTIVE = "ACTIVE"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """A registered user as stored in the `users` collection.

    Attributes:
        user_id (str): Generated identifier.
        email (str): Unique login email.
        display_name (Optional[str]): Name shown in the UI.
        password_hash (str): bcrypt hash; never serialized.
        avatar_url (Optional[str]): Profile picture URL.
        status (str): Account status, `ACTIVE` on registration.
        created_at (datetime): Registration time (UTC).
        updated_at (datetime): Last modification time (UTC).
    """

    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    email: str
    display_name: Optional[str] = None
    password_hash: str = Field(..., exclude=True)
    avatar_url: Optional[str] = None
    status: str = USER_STATUS_ACTIVE
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def to_document(self) -> dict:
        document = self.model_dump()
        document["password_hash"] = self.password_hash
        return document


class UserResponse(BaseModel):
    """Public view of a user, as rendered by the API."""

    user_id: str
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class RegisterRequest(BaseModel):
    """Registration payload."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class LoginRequest(BaseModel):
    """Login payload. `email` is normalized the same way as on registration."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1)
