# storefront/db/models/category.py
from sqlalchemy import Column, String, Text, UUID, DateTime
from storefront.db.base import Base
from storefront.db.models.types import utcnow
import uuid


class Category(Base):
    """
    Category a product is filed under.
    """

    __tablename__ = "categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self):
        return f"<Category(id={self.id}, slug='{self.slug}')>"
