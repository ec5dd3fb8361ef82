"""SQLModel table models."""
from mission_control.models.task import Task, TaskNote
from mission_control.models.taxonomy import TaxonomyCategory, TaxonomyItem, TaxonomyType
from mission_control.models.user import User

__all__ = ["Task", "TaskNote", "TaxonomyCategory", "TaxonomyItem", "TaxonomyType", "User"]
