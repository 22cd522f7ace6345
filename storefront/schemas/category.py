# storefront/schemas/category.py
from pydantic import Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from storefront.schemas.common import CamelModel


class CategoryBase(CamelModel):
    """Base Pydantic model for Category data"""
    name: str = Field(..., min_length=1, description="Display name of the category")
    description: Optional[str] = Field(None, description="Optional description of the category")


class CategoryCreate(CategoryBase):
    """Schema for creating a new Category"""
    slug: Optional[str] = Field(None, description="Defaults to a slug derived from the name")


class CategoryInDB(CategoryBase):
    """Schema for Category as stored in DB (includes DB fields)"""
    id: UUID
    slug: str
    created_at: datetime
    updated_at: datetime


class CategoryResponse(CategoryInDB):
    """Schema for API responses"""
    pass
