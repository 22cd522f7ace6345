# storefront/db/models/offer.py
from sqlalchemy import Column, String, Text, UUID, Float, Boolean, DateTime
from storefront.db.base import Base
from storefront.db.models.types import utcnow
import uuid


class Offer(Base):
    """
    Promotional offer that products may reference.
    """

    __tablename__ = "offers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(Text)
    discount_percent = Column(
        Float, nullable=False, default=0, comment="Discount applied by the offer"
    )
    starts_at = Column(DateTime(timezone=True), comment="Start of the offer window")
    ends_at = Column(DateTime(timezone=True), comment="End of the offer window")
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self):
        return f"<Offer(id={self.id}, title='{self.title}')>"
