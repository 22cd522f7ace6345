from storefront.db.models.category import Category
from storefront.db.models.offer import Offer
from storefront.db.models.product import Product
from storefront.db.models.review import Review

__all__ = ["Category", "Offer", "Product", "Review"]
