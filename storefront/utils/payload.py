"""Normalization of raw product payload values"""
import json
from typing import Dict, List, Optional

from storefront.core.exceptions import ValidationError
from storefront.schemas.payload import (
    DelimitedString,
    EncodedMapping,
    RawList,
    RawMapping,
    StructuredList,
    StructuredMapping,
)

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off", ""}


def split_delimited(text: str) -> List[str]:
    """Split comma-separated text, trimming items and dropping empty ones"""
    return [item.strip() for item in text.split(",") if item.strip()]


def _clean_items(items) -> List[str]:
    cleaned = []
    for item in items:
        if item is None:
            continue
        value = str(item).strip()
        if value:
            cleaned.append(value)
    return cleaned


def normalize_list(raw: Optional[RawList]) -> List[str]:
    """
    Turn a raw list field into a list of strings.

    A delimited string is first read as a JSON array; anything that is not a
    JSON array (including malformed JSON) falls back to a comma split. This
    never raises.
    """
    if raw is None:
        return []

    if isinstance(raw, StructuredList):
        return _clean_items(raw.items)

    if isinstance(raw, DelimitedString):
        try:
            decoded = json.loads(raw.text)
        except ValueError:
            return split_delimited(raw.text)
        if isinstance(decoded, list):
            return _clean_items(decoded)
        return split_delimited(raw.text)

    raise TypeError(f"Unsupported list payload: {type(raw).__name__}")


def normalize_specifications(raw: Optional[RawMapping]) -> Dict[str, str]:
    """
    Turn a raw specifications field into a string-to-string mapping.

    Unlike list fields there is no fallback: encoded text that is not a JSON
    object is rejected.
    """
    if raw is None:
        return {}

    if isinstance(raw, StructuredMapping):
        entries = raw.entries
    elif isinstance(raw, EncodedMapping):
        if not raw.text.strip():
            return {}
        try:
            entries = json.loads(raw.text)
        except ValueError as e:
            raise ValidationError(
                f"specifications is not valid JSON: {e.msg}", field="specifications"
            ) from e
    else:
        raise TypeError(f"Unsupported mapping payload: {type(raw).__name__}")

    if not isinstance(entries, dict):
        raise ValidationError("specifications must be a JSON object", field="specifications")

    return {
        str(key): "" if value is None else str(value)
        for key, value in entries.items()
    }


def coerce_number(value: Optional[str], field: str) -> float:
    """Coerce a submitted value to a float"""
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field)
    if number != number or number in (float("inf"), float("-inf")):
        raise ValidationError(f"{field} must be a finite number", field=field)
    return number


def coerce_bool(value: Optional[str], field: str) -> bool:
    """Coerce a submitted form value to a boolean"""
    if isinstance(value, bool):
        return value
    text = "" if value is None else str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValidationError(f"{field} must be a boolean", field=field)
