from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


# --- Images ---
class ProductImageRead(BaseModel):
    id: int
    url: str
    alt_text: str | None = None
    is_primary: bool = False
    sort_order: int = 0
    model_config = ConfigDict(from_attributes=True)


# --- Facets ---
class FacetValueRead(BaseModel):
    id: int
    facet_id: int
    slug: str
    name: str
    description: str | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Variants ---
class ProductVariantRead(BaseModel):
    id: int
    name: str
    enabled: bool = True
    attributes: dict | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Product ---
class ProductBase(BaseModel):
    slug: str
    name: str
    description: str | None = None
    saleable: bool = True
    status: str = "active"
    metadata: dict | None = None


class ProductRead(ProductBase):
    id: int
    variants: list[ProductVariantRead] = Field(default_factory=list)
    images: list[ProductImageRead] = Field(default_factory=list)
    facet_values: list[FacetValueRead] = Field(default_factory=list)

    # derived on read, never stored
    featured_image: str | None = None
    lowest_price: Decimal | None = None
    lowest_compare_at_price: Decimal | None = None
    currency: str
    default_variant: ProductVariantRead | None = None

    model_config = ConfigDict(from_attributes=True)
