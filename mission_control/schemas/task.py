"""Task schemas."""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class TaxonomyRef(BaseModel):
    """Taxonomy reference on a task. All three ids are required together."""
    category_id: Optional[str] = None
    type_id: Optional[str] = None
    item_id: Optional[str] = None


class TaskCreate(BaseModel):
    """Schema for creating a task."""
    title: str = Field(..., max_length=200)
    description: str
    assignee_id: Optional[str] = None
    taxonomy: Optional[TaxonomyRef] = None


class TaskUpdate(BaseModel):
    """Schema for replacing a task. Omitted optional fields are cleared."""
    title: str = Field(..., max_length=200)
    description: str
    status: str
    assignee_id: Optional[str] = None
    taxonomy: Optional[TaxonomyRef] = None


class TaskPatch(BaseModel):
    """
    Schema for a partial task update.

    Fields left out of the body are unchanged; an explicit null clears
    assignee_id or taxonomy.
    """
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = None
    assignee_id: Optional[str] = None
    taxonomy: Optional[TaxonomyRef] = None


class NoteCreate(BaseModel):
    text: str


class NoteResponse(BaseModel):
    id: str
    text: str
    author_id: str
    author_username: Optional[str] = None  # None when the author account is gone
    created_at: datetime


class AssigneeSummary(BaseModel):
    id: str
    username: str


class TaxonomyLabel(BaseModel):
    """Taxonomy reference with names resolved at read time."""
    category_id: str
    type_id: str
    item_id: str
    category_name: Optional[str] = None
    type_name: Optional[str] = None
    item_name: Optional[str] = None
    resolved: bool


class TaskResponse(BaseModel):
    """Schema for task API responses, always rendered from the full task."""
    id: str
    title: str
    description: str
    status: str
    assignee_id: Optional[str] = None
    assignee: Optional[AssigneeSummary] = None
    taxonomy: Optional[TaxonomyLabel] = None
    notes: List[NoteResponse] = []
    created_at: datetime
    updated_at: datetime


class TaskPage(BaseModel):
    """One page of the task listing."""
    items: List[TaskResponse]
    total: int
    page: int
    limit: int
    total_pages: int
