# storefront/db/models/review.py
from sqlalchemy import Column, String, Text, UUID, Integer, DateTime, CheckConstraint
from storefront.db.base import Base
from storefront.db.models.types import utcnow
import uuid


class Review(Base):
    """
    Customer review of a product.

    product_id carries no foreign key: deleting a product leaves its reviews
    in place (see ReviewRepository.delete_orphaned).
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    user_name = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Review(id={self.id}, product_id={self.product_id}, rating={self.rating})>"
