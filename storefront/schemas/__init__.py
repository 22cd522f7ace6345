# storefront/schemas/__init__.py
from storefront.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryInDB,
    CategoryResponse,
)
from storefront.schemas.offer import (
    OfferBase,
    OfferCreate,
    OfferInDB,
    OfferResponse,
)
from storefront.schemas.review import (
    ReviewCreate,
    ReviewInDB,
)
from storefront.schemas.product import (
    MediaAsset,
    ProductBase,
    ProductCreate,
    ProductInDB,
    ProductResponse,
)
from storefront.schemas.payload import (
    StructuredList,
    DelimitedString,
    RawList,
    StructuredMapping,
    EncodedMapping,
    RawMapping,
    ProductPayload,
)
