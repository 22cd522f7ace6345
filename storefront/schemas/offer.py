# storefront/schemas/offer.py
from pydantic import Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from storefront.schemas.common import CamelModel


class OfferBase(CamelModel):
    """Base Pydantic model for Offer data"""

    title: str = Field(..., min_length=1, description="Title shown with the offer")
    description: Optional[str] = Field(None, description="Offer details")
    discount_percent: float = Field(
        0, ge=0, le=100, description="Discount applied by the offer"
    )
    starts_at: Optional[datetime] = Field(None, description="Start of the offer window")
    ends_at: Optional[datetime] = Field(None, description="End of the offer window")
    is_active: bool = True


class OfferCreate(OfferBase):
    """Schema for creating a new Offer"""

    pass


class OfferInDB(OfferBase):
    """Schema for Offer as stored in DB (includes DB fields)"""

    id: UUID
    created_at: datetime
    updated_at: datetime


class OfferResponse(OfferInDB):
    """Schema for API responses"""

    pass
