# storefront/services/product_query_service.py
from typing import List
import logging

from storefront.core.exceptions import ResourceNotFoundError
from storefront.db.models.product import Product
from storefront.db.repositories.product_repository import ProductRepository
from storefront.db.repositories.review_repository import ReviewRepository
from storefront.schemas.product import ProductResponse
from storefront.utils.ratings import summarize_ratings, summarize_rating_values

logger = logging.getLogger(__name__)


class ProductQueryService:
    """
    Read side of the product catalog.

    Both operations return products with their category and offer joined in
    and with averageRating/totalReviews derived from the current reviews.
    Nothing derived here is written back.
    """

    def __init__(self, db_session):
        self.product_repo = ProductRepository(db_session)
        self.review_repo = ReviewRepository(db_session)

    @staticmethod
    def _to_response(product: Product, average_rating: float, total_reviews: int) -> ProductResponse:
        response = ProductResponse.model_validate(product)
        return response.model_copy(
            update={"average_rating": average_rating, "total_reviews": total_reviews}
        )

    def list_products(self) -> List[ProductResponse]:
        """Active products, newest first, with rating stats, category and offer"""
        rows = self.product_repo.list_active_with_rating_stats()

        products = []
        for product, rating_sum, review_count in rows:
            average_rating, total_reviews = summarize_ratings(rating_sum, review_count)
            products.append(self._to_response(product, average_rating, total_reviews))

        logger.debug(f"Listed {len(products)} active products")
        return products

    def get_product(self, id_or_slug: str) -> ProductResponse:
        """
        Get one product by slug, or by ID when no slug matches.

        Raises:
            ResourceNotFoundError: If neither the slug nor the ID resolves
        """
        product = self.product_repo.get_by_slug_or_id(id_or_slug, with_relations=True)
        if not product:
            raise ResourceNotFoundError("Product", id_or_slug)

        ratings = self.review_repo.list_ratings(product.id)
        average_rating, total_reviews = summarize_rating_values(ratings)
        return self._to_response(product, average_rating, total_reviews)
