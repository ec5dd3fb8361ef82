"""Task and note models for SQLModel."""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, String, ForeignKey, Text
from datetime import datetime
from typing import List, Optional
import uuid

from mission_control.utils.clock import utc_now

TASK_STATUSES = ("todo", "in_progress", "done")


class Task(SQLModel, table=True):
    """Task entity with soft assignee and taxonomy references."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: str = Field(max_length=200, min_length=1)
    description: str = Field(sa_column=Column(Text, nullable=False))
    status: str = Field(default="todo", max_length=20, index=True)  # todo, in_progress, done
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    # Soft references: looked up on read, never enforced
    assignee_id: Optional[str] = Field(default=None, max_length=36)
    category_id: Optional[str] = Field(default=None, max_length=36)
    type_id: Optional[str] = Field(default=None, max_length=36)
    item_id: Optional[str] = Field(default=None, max_length=36)

    # Relationships
    notes: List["TaskNote"] = Relationship(
        back_populates="task",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "TaskNote.position",
        }
    )


class TaskNote(SQLModel, table=True):
    """Note embedded in a task; only addressable through its task."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    task_id: str = Field(
        sa_column=Column(String, ForeignKey("task.id", ondelete="CASCADE"), index=True, nullable=False)
    )
    position: int = Field(default=0)
    text: str = Field(sa_column=Column(Text, nullable=False))  # stored verbatim, may contain markup
    author_id: str = Field(max_length=36)
    created_at: datetime = Field(default_factory=utc_now)

    task: Optional[Task] = Relationship(back_populates="notes")
