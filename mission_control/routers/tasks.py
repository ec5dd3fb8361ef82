"""Task router: task CRUD, listing and note sub-resources."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from mission_control.db.config import get_session
from mission_control.middleware.auth import AuthSession, get_auth_session
from mission_control.schemas.task import (
    NoteCreate,
    TaskCreate,
    TaskPage,
    TaskPatch,
    TaskResponse,
    TaskUpdate,
)
from mission_control.services.task_service import DEFAULT_PAGE_SIZE, TaskService
from mission_control.services.validation import parse_statuses

router = APIRouter(tags=["Tasks"])  # No prefix since main.py adds /api prefix


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session)


@router.get("/tasks", response_model=TaskPage)
def list_tasks(
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
    status_filter: Optional[str] = Query(
        None, alias="status", description="Comma-joined statuses: todo,in_progress,done"
    ),
    page: int = Query(1, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size, 1-100"),
):
    """List tasks newest first, optionally filtered by status."""
    return service.list_tasks(statuses=parse_statuses(status_filter), page=page, limit=limit)


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
):
    return service.create_task(
        title=task_data.title,
        description=task_data.description,
        assignee_id=task_data.assignee_id,
        taxonomy=task_data.taxonomy,
    )


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
):
    return service.get_task(task_id)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
):
    """Replace a task. Assignee and taxonomy left out of the body are cleared."""
    return service.update_task(
        task_id,
        title=task_data.title,
        description=task_data.description,
        status=task_data.status,
        assignee_id=task_data.assignee_id,
        taxonomy=task_data.taxonomy,
    )


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
def patch_task(
    task_id: str,
    task_data: TaskPatch,
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
):
    """Change only the fields present in the body; null clears assignee or taxonomy."""
    return service.patch_task(task_id, task_data.model_dump(exclude_unset=True))


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task and its notes."""
    service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/tasks/{task_id}/notes", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def add_note(
    task_id: str,
    note: NoteCreate,
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
):
    """Append a note authored by the caller; returns the full task."""
    return service.add_note(task_id, note.text, author_id=auth.user_id)


@router.delete("/tasks/{task_id}/notes/{note_id}", response_model=TaskResponse)
def delete_note(
    task_id: str,
    note_id: str,
    auth: AuthSession = Depends(get_auth_session),
    service: TaskService = Depends(get_task_service),
):
    """Remove a note; returns the full task."""
    return service.delete_note(task_id, note_id)
