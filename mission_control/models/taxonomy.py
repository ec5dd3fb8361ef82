"""Taxonomy models: three flat tables linked by parent ids."""
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from mission_control.utils.clock import utc_now


def _new_id() -> str:
    return str(uuid.uuid4())


class TaxonomyCategory(SQLModel, table=True):
    """Top level of the category -> type -> item hierarchy."""

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(max_length=200)
    created_at: datetime = Field(default_factory=utc_now)


class TaxonomyType(SQLModel, table=True):
    # Parent integrity is checked by TaxonomyService, not a foreign key
    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(max_length=200)
    category_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)


class TaxonomyItem(SQLModel, table=True):
    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(max_length=200)
    type_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
