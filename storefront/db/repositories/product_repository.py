# storefront/db/repositories/product_repository.py
from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func
from storefront.db.models.product import Product
from storefront.db.models.review import Review
from storefront.schemas.product import ProductCreate


def parse_uuid(value) -> Optional[UUID]:
    """Parse a UUID, returning None for anything that is not one"""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


class ProductRepository:
    """Repository for CRUD operations on Product model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def _query(self, with_relations: bool = False):
        query = self.db_session.query(Product)
        if with_relations:
            query = query.options(
                joinedload(Product.category),
                joinedload(Product.offer),
            )
        return query

    def get_by_id(self, product_id: UUID, with_relations: bool = False) -> Optional[Product]:
        """Get product by ID"""
        return self._query(with_relations).filter(Product.id == product_id).first()

    def get_by_slug(self, slug: str, with_relations: bool = False) -> Optional[Product]:
        """Get product by slug"""
        return self._query(with_relations).filter(Product.slug == slug).first()

    def get_by_slug_or_id(self, id_or_slug: str, with_relations: bool = False) -> Optional[Product]:
        """Get product by slug, falling back to the ID when no slug matches"""
        product = self.get_by_slug(id_or_slug, with_relations)
        if product:
            return product

        product_id = parse_uuid(id_or_slug)
        if product_id is None:
            return None
        return self.get_by_id(product_id, with_relations)

    def slug_exists(self, slug: str) -> bool:
        """Check whether any product already uses the slug"""
        return (
            self.db_session.query(Product.id).filter(Product.slug == slug).first()
            is not None
        )

    def list_active_with_rating_stats(self) -> List[Tuple[Product, int, int]]:
        """
        List active products, newest first, with review statistics.

        One statement: reviews are grouped per product in a subquery that is
        outer-joined to products, and category and offer are joined eagerly.
        Returns (product, rating_sum, review_count) tuples; products without
        reviews come back with (0, 0).
        """
        review_stats = (
            self.db_session.query(
                Review.product_id.label("product_id"),
                func.sum(Review.rating).label("rating_sum"),
                func.count(Review.id).label("review_count"),
            )
            .group_by(Review.product_id)
            .subquery()
        )

        rows = (
            self.db_session.query(
                Product, review_stats.c.rating_sum, review_stats.c.review_count
            )
            .outerjoin(review_stats, review_stats.c.product_id == Product.id)
            .options(
                joinedload(Product.category),
                joinedload(Product.offer),
            )
            .filter(Product.is_active.is_(True))
            .order_by(Product.created_at.desc())
            .all()
        )
        return [
            (product, rating_sum or 0, review_count or 0)
            for product, rating_sum, review_count in rows
        ]

    def create(self, product_data: ProductCreate) -> Product:
        """Create a new product"""
        # Create dict for SQLAlchemy model
        product_dict = product_data.model_dump(exclude={"main_image", "gallery_images"})
        product_dict["main_image_url"] = product_data.main_image.url
        product_dict["main_image_asset_id"] = product_data.main_image.asset_id
        product_dict["gallery_images"] = [
            image.model_dump() for image in product_data.gallery_images
        ]
        # Create new Product model instance
        db_product = Product(**product_dict)
        # Add to session
        self.db_session.add(db_product)
        self.db_session.commit()
        self.db_session.refresh(db_product)
        return db_product

    def update(self, db_product: Product, changes: Dict[str, Any]) -> Product:
        """Apply column changes to a product and save it"""
        for key, value in changes.items():
            setattr(db_product, key, value)
        self.db_session.commit()
        self.db_session.refresh(db_product)
        return db_product

    def delete(self, db_product: Product) -> None:
        """Delete a product"""
        self.db_session.delete(db_product)
        self.db_session.commit()

    def rollback(self) -> None:
        self.db_session.rollback()
