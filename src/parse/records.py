"""Locate and normalize records in parsed JSON input.

Two source shapes are understood:

* a flat array of plain objects (``[{rawHtml, name, id?, ...}]``)
* a scan result ``{Items: [...], Count, ScannedCount}`` whose fields may
  each be wrapped as ``{Value: x}``; the product fields sit either on the
  item itself or one level down under ``product.Value``.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from src.codec.errors import InvalidRecordError, MalformedInputError, MissingFieldError
from src.parse.models import Record

logger = logging.getLogger(__name__)

PAYLOAD_FIELD = "rawHtml"
MAX_ID_LENGTH = 50


# Source key -> Record field name
_SCALAR_FIELDS = {
    "id": "id",
    "url": "url",
    "imageUrl": "image_url",
    "price": "price",
    "originalPrice": "original_price",
    "shipping": "shipping",
    "isSponsored": "is_sponsored",
    "timestamp": "timestamp",
    "ttl": "ttl",
    "rawTextContent": "raw_text_content",
}


@dataclass
class RecordSource:
    """One located item, before field normalization."""

    data: dict[str, Any]
    category: Optional[str] = None
    domain: Optional[str] = None


def unwrap_value(node: Any) -> Any:
    """Return ``x`` for ``{"Value": x}``, otherwise the node itself."""
    if isinstance(node, dict) and "Value" in node:
        return node["Value"]
    return node


def _scalar(node: Any) -> Any:
    """Unwrap a field and drop anything that is not a scalar or is empty."""
    value = unwrap_value(node)
    if isinstance(value, (dict, list)):
        return None
    if value == "":
        return None
    return value


def slugify_name(name: str) -> str:
    """Build a filesystem-safe identifier from a display name."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")[:MAX_ID_LENGTH]


def locate_items(data: Any) -> list[RecordSource]:
    """Find the items to process in the parsed document.

    Returns an empty list for ``Items: null``, ``Items: []`` and ``[]``.
    Raises MalformedInputError for any other unrecognised shape.
    """
    if isinstance(data, dict):
        items = data.get("Items")
        if isinstance(items, list) and items:
            logger.info("Found nested JSON structure with Items array")
            return [_nested_source(item) for item in items]
        if "Items" in data and (items is None or items == []):
            logger.info("Input contains empty Items array or null Items")
            return []
    elif isinstance(data, list):
        if data:
            logger.info("Found flat JSON array structure")
            return [_flat_source(item) for item in data]
        logger.info("Input contains an empty array")
        return []

    raise MalformedInputError("Input JSON must be an array or contain an Items array")


def _nested_source(item: Any) -> RecordSource:
    if not isinstance(item, dict):
        return RecordSource(data={})
    payload = item
    product = unwrap_value(item.get("product"))
    if isinstance(product, dict):
        payload = product
    return RecordSource(
        data=payload,
        category=_scalar(item.get("category")) or _scalar(payload.get("category")),
        domain=_scalar(item.get("domain")) or _scalar(payload.get("domain")),
    )


def _flat_source(item: Any) -> RecordSource:
    if not isinstance(item, dict):
        return RecordSource(data={})
    return RecordSource(
        data=item,
        category=_scalar(item.get("category")),
        domain=_scalar(item.get("domain")),
    )


def normalize_record(source: RecordSource) -> Record:
    """Turn a located item into a Record.

    Raises MissingFieldError when the payload field does not resolve to a
    non-empty string, InvalidRecordError when another field has the wrong
    type.
    """
    data = source.data
    payload = unwrap_value(data.get(PAYLOAD_FIELD))
    if not isinstance(payload, str) or not payload.strip():
        raise MissingFieldError(PAYLOAD_FIELD)

    name = _scalar(data.get("name"))
    fields: dict[str, Any] = {
        "name": str(name) if name is not None else "Unknown",
        "category": source.category,
        "domain": source.domain,
        "compressed_html": payload,
    }
    for key, attr in _SCALAR_FIELDS.items():
        value = _scalar(data.get(key))
        if value is not None:
            fields[attr] = value
    if not fields.get("id"):
        fields["id"] = slugify_name(fields["name"])

    try:
        return Record.model_validate(fields)
    except ValidationError as e:
        raise InvalidRecordError(f"Invalid record fields: {e}") from e
