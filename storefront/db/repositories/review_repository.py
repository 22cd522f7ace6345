# storefront/db/repositories/review_repository.py
from typing import List
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import Session
from storefront.db.models.product import Product
from storefront.db.models.review import Review
from storefront.schemas.review import ReviewCreate


class ReviewRepository:
    """Repository for CRUD operations on Review model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def list_by_product(self, product_id: UUID) -> List[Review]:
        """List reviews for a product, newest first"""
        return (
            self.db_session.query(Review)
            .filter(Review.product_id == product_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    def list_ratings(self, product_id: UUID) -> List[int]:
        """Rating values of every review of a product"""
        rows = (
            self.db_session.query(Review.rating)
            .filter(Review.product_id == product_id)
            .all()
        )
        return [rating for (rating,) in rows]

    def create(self, product_id: UUID, review_data: ReviewCreate) -> Review:
        """Create a new review"""
        db_review = Review(product_id=product_id, **review_data.model_dump())
        self.db_session.add(db_review)
        self.db_session.commit()
        self.db_session.refresh(db_review)
        return db_review

    def delete_orphaned(self) -> int:
        """Delete reviews whose product no longer exists; returns the count"""
        deleted = (
            self.db_session.query(Review)
            .filter(~Review.product_id.in_(select(Product.id)))
            .delete(synchronize_session=False)
        )
        self.db_session.commit()
        return deleted
