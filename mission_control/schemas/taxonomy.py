"""Taxonomy schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    name: str = Field(..., max_length=200)


class TypeCreate(BaseModel):
    name: str = Field(..., max_length=200)
    category_id: str


class ItemCreate(BaseModel):
    name: str = Field(..., max_length=200)
    type_id: str


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime


class TypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category_id: str
    created_at: datetime


class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type_id: str
    created_at: datetime
