"""Taxonomy service: category -> type -> item hierarchy with cascading deletes."""
from typing import List, Optional

from sqlmodel import Session, select

from mission_control.errors import NotFound
from mission_control.models.taxonomy import TaxonomyCategory, TaxonomyItem, TaxonomyType
from mission_control.schemas.task import TaxonomyLabel
from mission_control.services.validation import require_text
from mission_control.utils.logger import get_logger

logger = get_logger("mission_control.taxonomy")


class TaxonomyService:
    """
    Manages three flat collections linked by parent ids.

    Creation requires the parent to exist; listing under a missing parent
    returns an empty list. Names are not unique.
    """

    def __init__(self, session: Session):
        self.session = session

    # Categories

    def list_categories(self) -> List[TaxonomyCategory]:
        statement = select(TaxonomyCategory).order_by(TaxonomyCategory.created_at, TaxonomyCategory.id)
        return list(self.session.exec(statement).all())

    def create_category(self, name: str) -> TaxonomyCategory:
        category = TaxonomyCategory(name=require_text(name, "Name"))
        self.session.add(category)
        self.session.commit()
        self.session.refresh(category)
        return category

    def delete_category(self, category_id: str) -> None:
        """Delete a category, its types and their items in one transaction."""
        category = self.session.get(TaxonomyCategory, category_id)
        if not category:
            raise NotFound("Category not found")

        types = self.session.exec(
            select(TaxonomyType).where(TaxonomyType.category_id == category_id)
        ).all()
        removed_items = sum(self._delete_items_of(node_type.id) for node_type in types)
        for node_type in types:
            self.session.delete(node_type)
        self.session.delete(category)
        self.session.commit()

        logger.info(
            "Category deleted",
            category_id=category_id,
            types_removed=len(types),
            items_removed=removed_items,
        )

    # Types

    def list_types(self, category_id: str) -> List[TaxonomyType]:
        statement = (
            select(TaxonomyType)
            .where(TaxonomyType.category_id == category_id)
            .order_by(TaxonomyType.created_at, TaxonomyType.id)
        )
        return list(self.session.exec(statement).all())

    def create_type(self, name: str, category_id: str) -> TaxonomyType:
        name = require_text(name, "Name")
        if not category_id or not self.session.get(TaxonomyCategory, category_id):
            raise NotFound("Category not found")

        node_type = TaxonomyType(name=name, category_id=category_id)
        self.session.add(node_type)
        self.session.commit()
        self.session.refresh(node_type)
        return node_type

    def delete_type(self, type_id: str) -> None:
        """Delete a type and its items in one transaction."""
        node_type = self.session.get(TaxonomyType, type_id)
        if not node_type:
            raise NotFound("Type not found")

        removed_items = self._delete_items_of(type_id)
        self.session.delete(node_type)
        self.session.commit()
        logger.info("Type deleted", type_id=type_id, items_removed=removed_items)

    # Items

    def list_items(self, type_id: str) -> List[TaxonomyItem]:
        statement = (
            select(TaxonomyItem)
            .where(TaxonomyItem.type_id == type_id)
            .order_by(TaxonomyItem.created_at, TaxonomyItem.id)
        )
        return list(self.session.exec(statement).all())

    def create_item(self, name: str, type_id: str) -> TaxonomyItem:
        name = require_text(name, "Name")
        if not type_id or not self.session.get(TaxonomyType, type_id):
            raise NotFound("Type not found")

        item = TaxonomyItem(name=name, type_id=type_id)
        self.session.add(item)
        self.session.commit()
        self.session.refresh(item)
        return item

    def delete_item(self, item_id: str) -> None:
        item = self.session.get(TaxonomyItem, item_id)
        if not item:
            raise NotFound("Item not found")
        self.session.delete(item)
        self.session.commit()

    def _delete_items_of(self, type_id: str) -> int:
        """Stage deletion of every item under ``type_id``; the caller commits."""
        items = self.session.exec(select(TaxonomyItem).where(TaxonomyItem.type_id == type_id)).all()
        for item in items:
            self.session.delete(item)
        return len(items)

    # Read-time resolution

    def resolve(
        self,
        category_id: Optional[str],
        type_id: Optional[str],
        item_id: Optional[str],
    ) -> Optional[TaxonomyLabel]:
        """
        Resolve a task's taxonomy reference to names.

        Returns None when the task has no reference. Ids pointing at deleted
        nodes resolve to a None name and mark the label unresolved.
        """
        if not (category_id and type_id and item_id):
            return None

        category = self.session.get(TaxonomyCategory, category_id)
        node_type = self.session.get(TaxonomyType, type_id)
        item = self.session.get(TaxonomyItem, item_id)
        return TaxonomyLabel(
            category_id=category_id,
            type_id=type_id,
            item_id=item_id,
            category_name=category.name if category else None,
            type_name=node_type.name if node_type else None,
            item_name=item.name if item else None,
            resolved=bool(category and node_type and item),
        )
