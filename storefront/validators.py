"""
Input validation models for data entering the storefront core.

Two boundaries carry loosely typed data: attribute records read from page
markup, and rows decoded from the persisted cart store. Both are parsed with
Pydantic models here before any domain entity is built.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .domain.entities import CartLineItem
from .helpers import parse_number


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class RawProductRecord(BaseModel):
    """
    Attribute record for one product as the page exposes it.

    Every field is optional. Numeric attributes accept displayed text
    (``"₹ 1,299"``) and fall back to 0 when nothing numeric is present.
    Attribute spellings used by the page markup (``oldprice``, ``img``,
    ``image``, ``desc``) are accepted as aliases.

    Attributes:
        id: Product identifier, may be absent
        name: Display name, required for indexing
        price: Current unit price
        old_price: Pre-discount price
        image_ref: Image URL or path
        description: Free text description
        category: Category used by the filter buttons
        newest: Recency key used by the "newest" sort
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[str] = None
    name: Optional[str] = None
    price: float = 0.0
    old_price: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("old_price", "oldPrice", "oldprice"),
    )
    image_ref: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("image_ref", "imageRef", "image", "img"),
    )
    description: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("description", "desc"),
    )
    category: Optional[str] = None
    newest: Optional[float] = None

    @field_validator("id", "name", "image_ref", "description", "category", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        """Stringify and trim text attributes; blanks become None."""
        return _optional_text(v)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> float:
        """Parse the price, clamping to zero."""
        return max(0.0, parse_number(v))

    @field_validator("old_price", "newest", mode="before")
    @classmethod
    def coerce_optional_number(cls, v: Any) -> Optional[float]:
        """Parse an optional number; unparseable values become None."""
        number = parse_number(v, default=None)
        if number is None:
            return None
        return max(0.0, number)


class StoredLineItem(BaseModel):
    """
    One row of the persisted cart collection.

    Accepts the ``img`` key written by older page scripts as an alias of
    ``imageRef``.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    name: str = ""
    price: float = Field(default=0.0, ge=0)
    old_price: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("oldPrice", "old_price"),
    )
    image_ref: str = Field(
        default="",
        validation_alias=AliasChoices("imageRef", "image_ref", "img"),
    )
    qty: int = Field(default=1, ge=1)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Ids may have been stored as numbers."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def to_entity(self) -> CartLineItem:
        """Build the domain line item."""
        return CartLineItem(
            id=self.id,
            name=self.name,
            price=self.price,
            old_price=self.old_price,
            image_ref=self.image_ref,
            qty=self.qty,
        )
