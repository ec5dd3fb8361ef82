"""Admin router: user management, restricted to the admin role."""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from mission_control.db.config import get_session
from mission_control.middleware.auth import AuthSession, require_admin
from mission_control.schemas.user import UpdateRoleRequest, UpdateUserRequest, UserPublic
from mission_control.services.user_service import UserService

router = APIRouter(tags=["Admin"])  # No prefix since main.py adds /api/admin


def get_user_service(session: Session = Depends(get_session)) -> UserService:
    """Dependency for getting UserService instance."""
    return UserService(session)


@router.get("/users", response_model=List[UserPublic])
def admin_list_users(
    admin: AuthSession = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return service.list_users()


@router.put("/users/{user_id}", response_model=UserPublic)
def admin_update_user(
    user_id: str,
    payload: UpdateUserRequest,
    admin: AuthSession = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Edit another account's email and/or username."""
    return service.update_profile(user_id, email=payload.email, username=payload.username)


@router.put("/users/{user_id}/role", response_model=UserPublic)
def admin_update_role(
    user_id: str,
    payload: UpdateRoleRequest,
    admin: AuthSession = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Set the role of another account. Admins cannot change their own role."""
    return service.set_role(admin.user_id, user_id, payload.role)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_user(
    user_id: str,
    admin: AuthSession = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(admin.user_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
