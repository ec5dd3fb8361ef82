# tests/test_taxonomy_service.py

import pytest
from sqlmodel import select

from mission_control.errors import InvalidInput, NotFound
from mission_control.models.taxonomy import TaxonomyCategory, TaxonomyItem, TaxonomyType
from mission_control.services.task_service import TaskService
from mission_control.services.taxonomy_service import TaxonomyService


def _tree(service: TaxonomyService, types: int = 2, items_per_type: int = 3):
    category = service.create_category("Malware")
    created_types = []
    created_items = []
    for t in range(types):
        node = service.create_type(f"Type {t}", category.id)
        created_types.append(node)
        for i in range(items_per_type):
            created_items.append(service.create_item(f"Item {t}.{i}", node.id))
    return category, created_types, created_items


def test_create_requires_existing_parent(session) -> None:
    service = TaxonomyService(session)
    with pytest.raises(NotFound):
        service.create_type("Ransomware", "missing-category")
    with pytest.raises(NotFound):
        service.create_item("LockBit", "missing-type")


def test_blank_names_are_rejected(session) -> None:
    service = TaxonomyService(session)
    with pytest.raises(InvalidInput):
        service.create_category("   ")


def test_duplicate_names_are_allowed(session) -> None:
    service = TaxonomyService(session)
    first = service.create_category("Network")
    second = service.create_category("Network")
    assert first.id != second.id
    assert [c.name for c in service.list_categories()] == ["Network", "Network"]


def test_listing_is_permissive(session) -> None:
    service = TaxonomyService(session)
    category = service.create_category("Empty")
    assert service.list_types(category.id) == []
    assert service.list_types("no-such-category") == []
    assert service.list_items("no-such-type") == []


def test_listing_scopes_children_to_parent(session) -> None:
    service = TaxonomyService(session)
    category, types, items = _tree(service)
    other = service.create_category("Other")
    service.create_type("Unrelated", other.id)

    assert [t.id for t in service.list_types(category.id)] == [t.id for t in types]
    assert [i.name for i in service.list_items(types[1].id)] == ["Item 1.0", "Item 1.1", "Item 1.2"]


def test_delete_category_cascades_without_orphans(session) -> None:
    service = TaxonomyService(session)
    category, _, _ = _tree(service, types=3, items_per_type=4)
    keep, keep_types, keep_items = _tree(service, types=1, items_per_type=2)

    service.delete_category(category.id)

    assert session.get(TaxonomyCategory, category.id) is None
    remaining_types = session.exec(select(TaxonomyType)).all()
    remaining_items = session.exec(select(TaxonomyItem)).all()
    assert [t.id for t in remaining_types] == [keep_types[0].id]
    assert {i.id for i in remaining_items} == {i.id for i in keep_items}


def test_delete_type_cascades_one_level(session) -> None:
    service = TaxonomyService(session)
    category, types, _ = _tree(service, types=2, items_per_type=2)

    service.delete_type(types[0].id)

    assert session.get(TaxonomyCategory, category.id) is not None
    assert service.list_items(types[0].id) == []
    assert len(service.list_items(types[1].id)) == 2


def test_delete_unknown_ids_fail(session) -> None:
    service = TaxonomyService(session)
    with pytest.raises(NotFound):
        service.delete_category("nope")
    with pytest.raises(NotFound):
        service.delete_type("nope")
    with pytest.raises(NotFound):
        service.delete_item("nope")


def test_stale_task_reference_still_fetches(session) -> None:
    taxonomy = TaxonomyService(session)
    category, types, items = _tree(taxonomy, types=1, items_per_type=1)
    tasks = TaskService(session)
    task = tasks.create_task(
        "Triage sample",
        "Unpack and classify",
        taxonomy={"category_id": category.id, "type_id": types[0].id, "item_id": items[0].id},
    )
    assert task.taxonomy.resolved is True
    assert task.taxonomy.item_name == "Item 0.0"

    taxonomy.delete_category(category.id)

    fetched = tasks.get_task(task.id)
    assert fetched.taxonomy.resolved is False
    assert fetched.taxonomy.category_id == category.id
    assert fetched.taxonomy.category_name is None
    assert fetched.taxonomy.item_name is None


def test_resolve_without_reference_is_none(session) -> None:
    assert TaxonomyService(session).resolve(None, None, None) is None
