"""User model for SQLModel."""
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from mission_control.utils.clock import utc_now

ROLES = ("user", "admin")


class User(SQLModel, table=True):
    """User entity for authentication and role checks."""

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True
    )
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=64)
    password_hash: str = Field(max_length=255)
    role: str = Field(default="user", max_length=20)  # user, admin
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
