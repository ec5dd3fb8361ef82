"""User schemas. None of them carries the password hash."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserPublic(BaseModel):
    """Public view of a user account."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str
    role: str
    created_at: datetime


class UpdateUserRequest(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None


class UpdateRoleRequest(BaseModel):
    role: str
