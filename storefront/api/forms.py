"""Conversion of multipart product forms into service inputs"""
import re
from typing import List, Optional, Tuple

from starlette.datastructures import FormData, UploadFile

from storefront.schemas.payload import (
    DelimitedString,
    EncodedMapping,
    ProductPayload,
    RawList,
    StructuredList,
    StructuredMapping,
)
from storefront.storage.base import MediaUpload

# Form field name -> ProductPayload attribute
SCALAR_FIELDS = {
    "name": "name",
    "price": "price",
    "discountPercent": "discount_percent",
    "categoryId": "category_id",
    "offerId": "offer_id",
    "description": "description",
    "about": "about",
    "isActive": "is_active",
}

LIST_FIELDS = {
    "sizes": "sizes",
    "colors": "colors",
    "addOns": "add_ons",
    "features": "features",
}

SPECIFICATION_KEY = re.compile(r"^specifications\[(.+)\]$")

MAIN_IMAGE_FIELD = "mainImage"
GALLERY_IMAGES_FIELD = "galleryImages"


def _text_values(form: FormData, key: str) -> List[str]:
    return [value for value in form.getlist(key) if isinstance(value, str)]


def raw_list(values: List[str], bracketed: bool = False) -> Optional[RawList]:
    """
    Tag submitted list values.

    Repeated fields (or ``key[]`` fields) are already a list; a single value
    is a string that still has to be decoded.
    """
    if not values:
        return None
    if len(values) == 1 and not bracketed:
        return DelimitedString(text=values[0])
    return StructuredList(items=values)


def _media_uploads(form: FormData, key: str) -> List[MediaUpload]:
    return [
        MediaUpload(
            filename=value.filename or "",
            content_type=value.content_type,
            stream=value.file,
        )
        for value in form.getlist(key)
        if isinstance(value, UploadFile)
    ]


def parse_product_form(form: FormData) -> Tuple[ProductPayload, List[MediaUpload], List[MediaUpload]]:
    """
    Split a product form into the payload, main image files and gallery files.

    Only fields present in the form end up set on the payload.
    """
    data = {}

    for form_key, field in SCALAR_FIELDS.items():
        values = _text_values(form, form_key)
        if values:
            data[field] = values[-1]

    for form_key, field in LIST_FIELDS.items():
        bracketed_values = _text_values(form, f"{form_key}[]")
        if bracketed_values:
            data[field] = raw_list(bracketed_values, bracketed=True)
            continue
        values = _text_values(form, form_key)
        if values:
            data[field] = raw_list(values)

    entries = {}
    for key in form.keys():
        match = SPECIFICATION_KEY.match(key)
        if match:
            values = _text_values(form, key)
            if values:
                entries[match.group(1)] = values[-1]
    if entries:
        data["specifications"] = StructuredMapping(entries=entries)
    else:
        encoded = _text_values(form, "specifications")
        if encoded:
            data["specifications"] = EncodedMapping(text=encoded[-1])

    payload = ProductPayload(**data)
    return (
        payload,
        _media_uploads(form, MAIN_IMAGE_FIELD),
        _media_uploads(form, GALLERY_IMAGES_FIELD),
    )
