"""Dashboard summary for the signed-in user."""
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from mission_control.db.config import get_session
from mission_control.middleware.auth import AuthSession, get_auth_session
from mission_control.models.user import User
from mission_control.services.task_service import TaskService
from mission_control.services.user_service import UserService

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=Dict[str, Any])
def get_dashboard(
    auth: AuthSession = Depends(get_auth_session),
    session: Session = Depends(get_session),
):
    """Welcome message plus user and task totals."""
    user = session.get(User, auth.user_id)
    name = user.username if user else "operator"
    tasks_by_status = TaskService(session).counts_by_status()
    return {
        "message": f"Welcome, {name}!",
        "user_id": auth.user_id,
        "stats": {
            "total_users": UserService(session).count_users(),
            "total_tasks": sum(tasks_by_status.values()),
            "tasks_by_status": tasks_by_status,
        },
    }
