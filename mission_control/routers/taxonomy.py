"""Taxonomy router: categories, types and items."""
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from mission_control.db.config import get_session
from mission_control.middleware.auth import AuthSession, get_auth_session
from mission_control.schemas.taxonomy import (
    CategoryCreate,
    CategoryResponse,
    ItemCreate,
    ItemResponse,
    TypeCreate,
    TypeResponse,
)
from mission_control.services.taxonomy_service import TaxonomyService

router = APIRouter(tags=["Taxonomy"])  # No prefix since main.py adds /api/taxonomy


def get_taxonomy_service(session: Session = Depends(get_session)) -> TaxonomyService:
    """Dependency for getting TaxonomyService instance."""
    return TaxonomyService(session)


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return service.list_categories()


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return service.create_category(payload.name)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    """Delete a category along with its types and their items."""
    service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/types", response_model=List[TypeResponse])
def list_types(
    category_id: str = Query(..., description="Parent category id"),
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return service.list_types(category_id)


@router.post("/types", response_model=TypeResponse, status_code=status.HTTP_201_CREATED)
def create_type(
    payload: TypeCreate,
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return service.create_type(payload.name, payload.category_id)


@router.delete("/types/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_type(
    type_id: str,
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    """Delete a type along with its items."""
    service.delete_type(type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/items", response_model=List[ItemResponse])
def list_items(
    type_id: str = Query(..., description="Parent type id"),
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return service.list_items(type_id)


@router.post("/items", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: ItemCreate,
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    return service.create_item(payload.name, payload.type_id)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: str,
    auth: AuthSession = Depends(get_auth_session),
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
