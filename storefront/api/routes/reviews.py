"""Product review endpoints"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Any, Dict

from storefront.api.routes.common import run_service
from storefront.db.base import get_db_session
from storefront.schemas.review import ReviewCreate
from storefront.services.review_service import ReviewService

reviews_router = APIRouter(
    prefix="/products/{id_or_slug}/reviews",
    responses={404: {"description": "Product not found"}},
)


@reviews_router.get("", status_code=status.HTTP_200_OK, summary="List reviews of a product")
async def list_reviews(id_or_slug: str, db: Session = Depends(get_db_session)) -> Dict[str, Any]:
    service = ReviewService(db)
    reviews = await run_service(f"listing reviews of {id_or_slug}", service.list_reviews, id_or_slug)
    return {"reviews": [review.to_json() for review in reviews]}


@reviews_router.post("", status_code=status.HTTP_201_CREATED, summary="Review a product")
async def create_review(
    id_or_slug: str,
    review_data: ReviewCreate,
    db: Session = Depends(get_db_session),
) -> Dict[str, Any]:
    service = ReviewService(db)
    review = await run_service(
        f"adding review to {id_or_slug}", service.add_review, id_or_slug, review_data
    )
    return {"message": "Review added", "review": review.to_json()}
