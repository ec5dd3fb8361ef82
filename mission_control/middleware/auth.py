"""Bearer-token authentication and role checks for FastAPI routes."""
from fastapi import Depends, Request
from pydantic import BaseModel
from sqlmodel import Session

from mission_control.db.config import get_session
from mission_control.errors import Forbidden, Unauthorized
from mission_control.services.identity_service import verify_token
from mission_control.services.user_service import UserService


class AuthSession(BaseModel):
    """Identity of the caller, resolved once per request and passed explicitly."""
    user_id: str
    token: str


def extract_bearer_token(request: Request) -> str:
    auth_header = request.headers.get("authorization")
    if not auth_header:
        raise Unauthorized("Missing Authorization header")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Invalid Authorization header")
    return token.strip()


async def get_auth_session(request: Request) -> AuthSession:
    """
    Validate the bearer token and return the caller's session.

    The token is checked for signature and expiry only; the account itself
    is not looked up, so a token stays valid until it expires.

    Raises:
        Unauthorized: If the header is missing or the token is invalid or expired
    """
    token = extract_bearer_token(request)
    user_id = verify_token(token)
    return AuthSession(user_id=user_id, token=token)


def require_admin(
    auth: AuthSession = Depends(get_auth_session),
    session: Session = Depends(get_session),
) -> AuthSession:
    """
    Allow the request only if the caller currently holds the admin role.

    Raises:
        Forbidden: If the caller is not an admin or no longer exists
    """
    if UserService(session).get_role(auth.user_id) != "admin":
        raise Forbidden("Admin access required")
    return auth
