from storefront.db.repositories.category_repository import CategoryRepository
from storefront.db.repositories.offer_repository import OfferRepository
from storefront.db.repositories.product_repository import ProductRepository
from storefront.db.repositories.review_repository import ReviewRepository

__all__ = [
    "CategoryRepository",
    "OfferRepository",
    "ProductRepository",
    "ReviewRepository",
]
