# storefront/schemas/review.py
from pydantic import Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from storefront.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    """Schema for submitting a review"""

    user_name: str = Field(..., min_length=1, description="Name shown with the review")
    rating: int = Field(..., description="Star rating from 1 to 5")
    comment: Optional[str] = None


class ReviewInDB(ReviewCreate):
    """Schema for Review as stored in DB"""

    id: UUID
    product_id: UUID
    created_at: datetime
