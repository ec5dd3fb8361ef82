"""Authentication router: public register/login and the current-user lookup."""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from mission_control.db.config import get_session
from mission_control.middleware.auth import AuthSession, get_auth_session
from mission_control.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from mission_control.schemas.user import UserPublic
from mission_control.services.identity_service import IdentityService

router = APIRouter(tags=["Authentication"])  # No prefix since main.py adds /api/auth


def get_identity_service(session: Session = Depends(get_session)) -> IdentityService:
    """Dependency for getting IdentityService instance."""
    return IdentityService(session)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, service: IdentityService = Depends(get_identity_service)):
    """Create an account and return a session token for it."""
    return service.register(request.email, request.username, request.password)


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, service: IdentityService = Depends(get_identity_service)):
    return service.login(request.email, request.password)


@router.get("/me", response_model=UserPublic)
def me(
    auth: AuthSession = Depends(get_auth_session),
    service: IdentityService = Depends(get_identity_service),
):
    """Return the caller's public profile (404 if the account was deleted)."""
    return service.current_user(auth.user_id)
