"""Category endpoints"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, Dict

from storefront.api.routes.common import run_service
from storefront.core.auth import api_key_auth_admin
from storefront.db.base import get_db_session
from storefront.schemas.category import CategoryCreate
from storefront.services.category_service import CategoryService

categories_router = APIRouter(prefix="/categories")


@categories_router.get("", status_code=status.HTTP_200_OK, summary="List categories")
async def list_categories(db: Session = Depends(get_db_session)) -> Dict[str, Any]:
    service = CategoryService(db)
    categories = await run_service("listing categories", service.list_categories)
    return {"categories": [category.to_json() for category in categories]}


@categories_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    dependencies=[Depends(api_key_auth_admin)],
)
async def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db_session),
) -> Dict[str, Any]:
    service = CategoryService(db)
    category = await run_service("creating category", service.create_category, category_data)
    return {"message": "Category created", "category": category.to_json()}
