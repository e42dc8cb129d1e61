"""
Feed data models.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any


@dataclass(frozen=True)
class CatalogImage:
    """Product image reference."""
    url: str


@dataclass(frozen=True)
class CatalogVariant:
    """Product variant; price is the upstream decimal string, kept verbatim."""
    price: str


@dataclass(frozen=True)
class CatalogItem:
    """Normalized catalog item as returned by the Shopify products endpoint."""
    title: str
    handle: str  # URL slug, used to build the item permalink
    updated_at: datetime
    description_html: Optional[str] = None
    images: List[CatalogImage] = field(default_factory=list)
    variants: List[CatalogVariant] = field(default_factory=list)
    product_type: Optional[str] = None
    tags: Optional[str] = None  # Comma separated

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CatalogItem":
        """
        Build an item from a Shopify product JSON object.

        Raises:
            ValueError: If the payload is not an object or updated_at is unparseable.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Product entry must be an object, got {type(data).__name__}")

        images = [
            CatalogImage(url=img.get('src', ''))
            for img in data.get('images') or []
            if isinstance(img, dict)
        ]
        variants = [
            CatalogVariant(price=_price_text(var.get('price')))
            for var in data.get('variants') or []
            if isinstance(var, dict)
        ]

        return cls(
            title=data.get('title') or '',
            handle=data.get('handle') or '',
            updated_at=parse_timestamp(data.get('updated_at')),
            description_html=data.get('body_html') or data.get('description'),
            images=images,
            variants=variants,
            product_type=data.get('product_type') or None,
            tags=data.get('tags') or None,
        )


@dataclass
class FeedConfig:
    """Channel-level feed settings."""
    title: str = ''
    description: str = ''
    link: str = ''  # Base URL without trailing slash
    language: str = ''


def _price_text(value: Any) -> str:
    """Upstream price as text; a missing or null price is empty."""
    return '' if value is None else str(value)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are treated as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid updated_at timestamp: {value!r}")
    else:
        raise ValueError(f"Invalid updated_at timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
