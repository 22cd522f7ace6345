# storefront/schemas/product.py
from pydantic import Field
from typing import List, Optional, Dict
from uuid import UUID
from datetime import datetime

from storefront.schemas.common import CamelModel
from storefront.schemas.category import CategoryResponse
from storefront.schemas.offer import OfferResponse


class MediaAsset(CamelModel):
    """Uploaded media: public URL plus the host's asset identifier"""

    url: str
    asset_id: str


class ProductBase(CamelModel):
    """Base Pydantic model for Product data"""

    name: str
    slug: str = Field(..., description="URL-safe, globally unique secondary key")
    category_id: UUID = Field(..., description="Category this product is filed under")
    offer_id: Optional[UUID] = Field(None, description="Offer attached to the product")
    price: float = Field(..., ge=0)
    discount_percent: float = Field(0, ge=0, le=100)
    main_image: MediaAsset
    gallery_images: List[MediaAsset] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    add_ons: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    specifications: Dict[str, str] = Field(default_factory=dict)
    description: Optional[str] = None
    about: Optional[str] = None
    is_active: bool = True


class ProductCreate(ProductBase):
    """Schema for creating a new Product"""

    pass


class ProductInDB(ProductBase):
    """Schema for Product as stored in DB (includes DB fields)"""

    id: UUID
    created_at: datetime
    updated_at: datetime


class ProductResponse(ProductInDB):
    """Product as returned by the read endpoints, with joined and derived data"""

    category: Optional[CategoryResponse] = None
    offer: Optional[OfferResponse] = None
    average_rating: float = Field(0, description="Mean review rating, one decimal")
    total_reviews: int = Field(0, description="Number of reviews")
