# storefront/schemas/payload.py
"""
Raw product mutation payloads as they arrive from a multipart form.

List-valued fields arrive either as repeated form fields or as one string
(JSON array text or comma-separated values); specifications arrive either as
a mapping or as JSON object text. Both shapes are modelled as tagged unions
and normalized by ``storefront.utils.payload``.
"""
from pydantic import BaseModel, Field
from typing import Annotated, Dict, List, Literal, Optional, Union


class StructuredList(BaseModel):
    """List already split into items (e.g. repeated form fields)"""

    kind: Literal["structured"] = "structured"
    items: List[str]


class DelimitedString(BaseModel):
    """Single string holding a JSON array or comma-separated values"""

    kind: Literal["delimited"] = "delimited"
    text: str


RawList = Annotated[Union[StructuredList, DelimitedString], Field(discriminator="kind")]


class StructuredMapping(BaseModel):
    """Specifications already given as a key/value mapping"""

    kind: Literal["structured"] = "structured"
    entries: Dict[str, object]


class EncodedMapping(BaseModel):
    """Specifications given as JSON object text"""

    kind: Literal["encoded"] = "encoded"
    text: str


RawMapping = Annotated[Union[StructuredMapping, EncodedMapping], Field(discriminator="kind")]


class ProductPayload(BaseModel):
    """
    Product fields as submitted by the client.

    Scalars stay as the submitted strings until the write service coerces
    them. Only fields the client actually sent are in ``model_fields_set``;
    updates touch exactly those.
    """

    name: Optional[str] = None
    price: Optional[str] = None
    discount_percent: Optional[str] = None
    category_id: Optional[str] = None
    offer_id: Optional[str] = None
    description: Optional[str] = None
    about: Optional[str] = None
    is_active: Optional[str] = None
    sizes: Optional[RawList] = None
    colors: Optional[RawList] = None
    add_ons: Optional[RawList] = None
    features: Optional[RawList] = None
    specifications: Optional[RawMapping] = None

    def provided(self, field: str) -> bool:
        """Whether the client sent this field"""
        return field in self.model_fields_set
