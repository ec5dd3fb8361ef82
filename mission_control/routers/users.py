"""User directory for authenticated users, e.g. for picking an assignee."""
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from mission_control.db.config import get_session
from mission_control.middleware.auth import AuthSession, get_auth_session
from mission_control.schemas.user import UserPublic
from mission_control.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=List[UserPublic])
def list_users(
    auth: AuthSession = Depends(get_auth_session),
    session: Session = Depends(get_session),
):
    return UserService(session).list_users()
