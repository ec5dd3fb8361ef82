"""Task service: task CRUD, embedded notes and paginated listing."""
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from mission_control.errors import InvalidInput, NotFound
from mission_control.models.task import TASK_STATUSES, Task, TaskNote
from mission_control.models.user import User
from mission_control.schemas.task import (
    AssigneeSummary,
    NoteResponse,
    TaskPage,
    TaskResponse,
    TaxonomyRef,
)
from mission_control.services.taxonomy_service import TaxonomyService
from mission_control.services.validation import (
    check_status,
    check_taxonomy_ids,
    require_text,
)
from mission_control.utils.clock import utc_now
from mission_control.utils.logger import get_logger

logger = get_logger("mission_control.tasks")

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100

TaxonomyInput = Union[TaxonomyRef, Dict[str, Any], None]
TaxonomyIds = Tuple[Optional[str], Optional[str], Optional[str]]


def _taxonomy_ids(taxonomy: TaxonomyInput) -> TaxonomyIds:
    """Validate a taxonomy reference and return its three ids, or three Nones."""
    if taxonomy is None:
        return None, None, None
    if isinstance(taxonomy, dict):
        try:
            taxonomy = TaxonomyRef(**taxonomy)
        except ValidationError:
            raise InvalidInput("Taxonomy ids must be strings")
    ids = (taxonomy.category_id, taxonomy.type_id, taxonomy.item_id)
    if not check_taxonomy_ids(ids):
        return None, None, None
    return tuple(value.strip() for value in ids)


def _soft_ref(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class TaskService:
    """Service class for task CRUD operations, notes and listing."""

    def __init__(self, session: Session):
        self.session = session
        self.taxonomy = TaxonomyService(session)

    def _load(self, task_id: str) -> Task:
        statement = select(Task).where(Task.id == task_id).options(selectinload(Task.notes))
        task = self.session.exec(statement).first()
        if not task:
            raise NotFound("Task not found")
        return task

    def _apply_taxonomy(self, task: Task, taxonomy: TaxonomyInput) -> None:
        task.category_id, task.type_id, task.item_id = _taxonomy_ids(taxonomy)

    # Rendering

    def _usernames(self, user_ids: Iterable[Optional[str]]) -> Dict[str, str]:
        wanted = {user_id for user_id in user_ids if user_id}
        if not wanted:
            return {}
        users = self.session.exec(select(User).where(User.id.in_(wanted))).all()
        return {user.id: user.username for user in users}

    def render_many(self, tasks: List[Task]) -> List[TaskResponse]:
        """Render tasks, resolving soft references to names or None."""
        user_ids = []
        for task in tasks:
            user_ids.append(task.assignee_id)
            user_ids.extend(note.author_id for note in task.notes)
        usernames = self._usernames(user_ids)

        rendered = []
        for task in tasks:
            assignee = None
            if task.assignee_id in usernames:
                assignee = AssigneeSummary(id=task.assignee_id, username=usernames[task.assignee_id])
            rendered.append(
                TaskResponse(
                    id=task.id,
                    title=task.title,
                    description=task.description,
                    status=task.status,
                    assignee_id=task.assignee_id,
                    assignee=assignee,
                    taxonomy=self.taxonomy.resolve(task.category_id, task.type_id, task.item_id),
                    notes=[
                        NoteResponse(
                            id=note.id,
                            text=note.text,
                            author_id=note.author_id,
                            author_username=usernames.get(note.author_id),
                            created_at=note.created_at,
                        )
                        for note in task.notes
                    ],
                    created_at=task.created_at,
                    updated_at=task.updated_at,
                )
            )
        return rendered

    def render(self, task: Task) -> TaskResponse:
        return self.render_many([task])[0]

    # CRUD

    def create_task(
        self,
        title: str,
        description: str,
        assignee_id: Optional[str] = None,
        taxonomy: TaxonomyInput = None,
    ) -> TaskResponse:
        """Create a new ``todo`` task. The assignee is not checked for existence."""
        now = utc_now()
        task = Task(
            title=require_text(title, "Title"),
            description=require_text(description, "Description"),
            status="todo",
            assignee_id=_soft_ref(assignee_id),
            created_at=now,
            updated_at=now,
        )
        self._apply_taxonomy(task, taxonomy)

        self.session.add(task)
        self.session.commit()
        return self.get_task(task.id)

    def get_task(self, task_id: str) -> TaskResponse:
        return self.render(self._load(task_id))

    def update_task(
        self,
        task_id: str,
        title: str,
        description: str,
        status: str,
        assignee_id: Optional[str] = None,
        taxonomy: TaxonomyInput = None,
    ) -> TaskResponse:
        """Replace a task's editable fields; omitted optional fields are cleared."""
        task = self._load(task_id)

        title = require_text(title, "Title")
        description = require_text(description, "Description")
        status = check_status(status)
        category_id, type_id, item_id = _taxonomy_ids(taxonomy)

        task.title = title
        task.description = description
        task.status = status
        task.assignee_id = _soft_ref(assignee_id)
        task.category_id, task.type_id, task.item_id = category_id, type_id, item_id
        task.updated_at = utc_now()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return self.render(task)

    def patch_task(self, task_id: str, changes: Dict[str, Any]) -> TaskResponse:
        """
        Apply a partial update.

        Args:
            task_id: Task to change
            changes: Only the fields the client sent; a None value for
                ``assignee_id`` or ``taxonomy`` clears that reference

        Raises:
            NotFound: If the task does not exist
            InvalidInput: If a supplied value fails validation
        """
        task = self._load(task_id)

        values = {}
        if "title" in changes:
            values["title"] = require_text(changes["title"], "Title")
        if "description" in changes:
            values["description"] = require_text(changes["description"], "Description")
        if "status" in changes:
            values["status"] = check_status(changes["status"])
        if "assignee_id" in changes:
            values["assignee_id"] = _soft_ref(changes["assignee_id"])
        if "taxonomy" in changes:
            values["category_id"], values["type_id"], values["item_id"] = _taxonomy_ids(changes["taxonomy"])

        for field, value in values.items():
            setattr(task, field, value)
        task.updated_at = utc_now()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return self.render(task)

    def delete_task(self, task_id: str) -> None:
        """Delete a task together with its notes."""
        task = self._load(task_id)
        self.session.delete(task)
        self.session.commit()
        logger.info("Task deleted", task_id=task_id)

    # Listing

    def list_tasks(
        self,
        statuses: Optional[Iterable[str]] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> TaskPage:
        """
        List tasks newest first, optionally filtered by status.

        A page past the end yields no items but still reports the totals.
        """
        if page < 1:
            raise InvalidInput("page must be >= 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise InvalidInput(f"limit must be between 1 and {MAX_PAGE_SIZE}")

        count_statement = select(func.count()).select_from(Task)
        statement = select(Task).options(selectinload(Task.notes))
        if statuses:
            statuses = [check_status(status) for status in statuses]
            count_statement = count_statement.where(Task.status.in_(statuses))
            statement = statement.where(Task.status.in_(statuses))

        total = self.session.exec(count_statement).one()
        offset = (page - 1) * limit
        tasks = []
        # Pages past the end never reach the database
        if offset < total:
            statement = (
                statement.order_by(Task.created_at.desc(), Task.id.desc())
                .offset(offset)
                .limit(limit)
            )
            tasks = list(self.session.exec(statement).all())

        return TaskPage(
            items=self.render_many(tasks),
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    def counts_by_status(self) -> Dict[str, int]:
        counts = {status: 0 for status in TASK_STATUSES}
        rows = self.session.exec(select(Task.status, func.count()).group_by(Task.status)).all()
        for status, count in rows:
            counts[status] = count
        return counts

    # Notes

    def add_note(self, task_id: str, text: str, author_id: str) -> TaskResponse:
        """Append a note and return the whole updated task."""
        task = self._load(task_id)
        # Validated for content but stored verbatim, formatting included
        require_text(text, "Note")

        next_position = max((note.position for note in task.notes), default=-1) + 1
        task.notes.append(TaskNote(text=text, author_id=author_id, position=next_position))
        task.updated_at = utc_now()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return self.render(task)

    def delete_note(self, task_id: str, note_id: str) -> TaskResponse:
        """Remove one note and return the whole updated task."""
        task = self._load(task_id)
        note = next((note for note in task.notes if note.id == note_id), None)
        if not note:
            raise NotFound("Note not found")

        task.notes.remove(note)
        task.updated_at = utc_now()

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return self.render(task)
