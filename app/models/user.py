# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

DEFAULT_AVATAR_URL = "https://via.placeholder.com/150/6366f1/ffffff?text=U"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    Persistent account for TaskMaster.

    Identity:
      - id: random UUID assigned on signup.
      - email: unique, stored lowercased and trimmed; never changed after signup.

    Password:
      - only the bcrypt hash is stored (`password_hash`).
      - read schemas never expose it.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        max_length=254,
        description="Lowercased, trimmed login email",
    )

    password_hash: str = Field(
        description="bcrypt hash of the user's password",
    )

    # Display name; local part of the email by default
    name: str = Field(max_length=50)

    bio: str = Field(default="", max_length=200)

    avatar: str = Field(
        default=DEFAULT_AVATAR_URL,
        description="Profile picture URL",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last modification timestamp (UTC)",
    )
