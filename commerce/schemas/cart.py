from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from commerce.models.product import ProductVariant


class StoreCartAddRequest(BaseModel):
    """Add to cart by explicit variant or by product slug (default variant)."""

    product_variant_id: int | None = None
    product_id: str | None = Field(default=None, min_length=1)
    quantity: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(extra="ignore")


class StoreCartRemoveRequest(BaseModel):
    product_variant_id: int

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True, slots=True)
class CartLine:
    variant: ProductVariant
    quantity: int
