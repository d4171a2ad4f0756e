"""Data models for extracted and decompressed records."""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Emitted only when a value is present.
OPTIONAL_OUTPUT_FIELDS = (
    "domain",
    "price",
    "originalPrice",
    "shipping",
    "isSponsored",
    "timestamp",
    "ttl",
    "rawTextContent",
)

_STRING_FIELDS = (
    "id",
    "name",
    "category",
    "domain",
    "url",
    "image_url",
    "price",
    "original_price",
    "shipping",
    "timestamp",
    "ttl",
    "raw_text_content",
)


class RecordFields(BaseModel):
    """Metadata shared by source and output records."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str = "Unknown"
    category: Optional[str] = None
    domain: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    price: Optional[str] = None
    original_price: Optional[str] = Field(default=None, alias="originalPrice")
    shipping: Optional[str] = None
    is_sponsored: Optional[bool] = Field(default=None, alias="isSponsored")
    timestamp: Optional[str] = None
    ttl: Optional[str] = None
    raw_text_content: Optional[str] = Field(default=None, alias="rawTextContent")

    @field_validator(*_STRING_FIELDS, mode="before")
    @classmethod
    def _stringify_scalars(cls, value: Any) -> Any:
        # Stores hand back numbers for ttl/price-like fields.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Record(RecordFields):
    """Normalized record carrying its base64 compressed payload."""

    compressed_html: str = Field(..., min_length=1, alias="rawHtml")


class OutputRecord(RecordFields):
    """Record with its payload decompressed, as written to YAML."""

    raw_html: Optional[str] = Field(default=None, alias="rawHtml")

    def to_output(self) -> dict[str, Any]:
        """Serializable mapping with the wire field names, in output order."""
        data = self.model_dump(by_alias=True)
        ordered = {
            "id": data["id"],
            "name": data["name"],
            "category": data["category"],
            "url": data["url"],
            "imageUrl": data["imageUrl"],
            "rawHtml": data["rawHtml"],
        }
        for key in OPTIONAL_OUTPUT_FIELDS:
            if data.get(key) is not None:
                ordered[key] = data[key]
        return ordered
