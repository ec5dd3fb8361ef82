"""Authentication schemas."""
from pydantic import BaseModel

from mission_control.schemas.user import UserPublic


class RegisterRequest(BaseModel):
    """Register request body."""
    email: str
    username: str
    password: str


class LoginRequest(BaseModel):
    """Login request body."""
    email: str
    password: str


class AuthResponse(BaseModel):
    """Response containing a session token and the caller's public profile."""
    token: str
    user: UserPublic
