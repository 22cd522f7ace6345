# storefront/services/review_service.py
from typing import List
import logging

from storefront.core.exceptions import ResourceNotFoundError, ValidationError
from storefront.db.repositories.product_repository import ProductRepository
from storefront.db.repositories.review_repository import ReviewRepository
from storefront.schemas.review import ReviewCreate, ReviewInDB

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewService:
    """Service for product reviews"""

    def __init__(self, db_session):
        self.product_repo = ProductRepository(db_session)
        self.review_repo = ReviewRepository(db_session)

    def _resolve_product(self, id_or_slug: str):
        product = self.product_repo.get_by_slug_or_id(id_or_slug)
        if not product:
            raise ResourceNotFoundError("Product", id_or_slug)
        return product

    def add_review(self, id_or_slug: str, review_data: ReviewCreate) -> ReviewInDB:
        """Add a review to a product"""
        if not MIN_RATING <= review_data.rating <= MAX_RATING:
            raise ValidationError(
                f"rating must be between {MIN_RATING} and {MAX_RATING}", field="rating"
            )
        if not review_data.user_name.strip():
            raise ValidationError("userName is required", field="userName")

        product = self._resolve_product(id_or_slug)
        review = self.review_repo.create(product.id, review_data)
        logger.info(f"Added {review.rating}-star review {review.id} to product {product.id}")
        return ReviewInDB.model_validate(review)

    def list_reviews(self, id_or_slug: str) -> List[ReviewInDB]:
        """List reviews of a product, newest first"""
        product = self._resolve_product(id_or_slug)
        reviews = self.review_repo.list_by_product(product.id)
        return [ReviewInDB.model_validate(review) for review in reviews]

    def purge_orphaned_reviews(self) -> int:
        """
        Remove reviews left behind by deleted products.

        Product deletion never touches reviews; this is the explicit cleanup
        hook for the dangling ones.
        """
        deleted = self.review_repo.delete_orphaned()
        logger.info(f"Purged {deleted} orphaned review(s)")
        return deleted
