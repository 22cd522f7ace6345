# storefront/db/models/product.py
from sqlalchemy import Column, String, Text, ForeignKey, UUID, Float, Boolean, DateTime
from sqlalchemy.orm import relationship
from storefront.db.base import Base
from storefront.db.models.types import JSONType, utcnow
import uuid


class Product(Base):
    """
    Product listed in the storefront.

    Rating statistics are derived from reviews at read time and are never
    stored on this table.
    """

    __tablename__ = "products"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, index=True)
    slug = Column(
        String,
        unique=True,
        nullable=False,
        index=True,
        comment="URL-safe name plus a uniqueness token",
    )
    category_id = Column(
        UUID(as_uuid=True),
        ForeignKey("categories.id"),
        nullable=False,
    )
    offer_id = Column(
        UUID(as_uuid=True),
        ForeignKey("offers.id", ondelete="SET NULL"),
        nullable=True,
    )
    price = Column(Float, nullable=False)
    discount_percent = Column(Float, nullable=False, default=0)

    # Media host references
    main_image_url = Column(String, nullable=False)
    main_image_asset_id = Column(String, nullable=False)
    gallery_images = Column(
        JSONType, nullable=False, default=list, comment="Ordered list of {url, asset_id}"
    )

    sizes = Column(JSONType, nullable=False, default=list)
    colors = Column(JSONType, nullable=False, default=list)
    add_ons = Column(JSONType, nullable=False, default=list)
    features = Column(JSONType, nullable=False, default=list)
    specifications = Column(JSONType, nullable=False, default=dict)
    description = Column(Text)
    about = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    category = relationship("Category", foreign_keys=[category_id])
    offer = relationship("Offer", foreign_keys=[offer_id])

    @property
    def main_image(self):
        return {"url": self.main_image_url, "asset_id": self.main_image_asset_id}

    @property
    def asset_ids(self):
        """Every media asset this product references, main image first"""
        ids = [self.main_image_asset_id]
        ids.extend(image["asset_id"] for image in self.gallery_images or [])
        return ids

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', slug='{self.slug}')>"
