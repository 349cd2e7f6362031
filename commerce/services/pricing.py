from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from commerce.core.config import settings
from commerce.db.operations import run_sync
from commerce.models.product import Product, ProductVariant
from commerce.services.relation_loader import RelationLoader


@dataclass(frozen=True, slots=True)
class ProductPricing:
    lowest_price: Decimal | None
    lowest_compare_at_price: Decimal | None
    currency: str
    default_variant: ProductVariant | None


class PriceResolver:
    """Derives display pricing for a product from its variants.

    Each variant contributes the first price entry of its first seller
    record. Values are recomputed on every call; only the relation
    collections are reused once loaded.
    """

    def __init__(self, loader: RelationLoader, default_currency: str | None = None):
        self.loader = loader
        self.default_currency = default_currency or settings.DEFAULT_CURRENCY

    def _lowest(self, product: Product, field: str) -> Decimal | None:
        lowest: Decimal | None = None
        for variant in self.loader.variants(product):
            entry = self.loader.current_price(variant)
            if entry is None:
                continue
            value = getattr(entry, field)
            if value is not None and (lowest is None or value < lowest):
                lowest = value
        return lowest

    def lowest_price(self, product: Product) -> Decimal | None:
        return self._lowest(product, "price")

    def lowest_compare_at_price(self, product: Product) -> Decimal | None:
        return self._lowest(product, "compare_at_price")

    def currency(self, product: Product) -> str:
        """Currency of the first variant's current price, else the default."""
        variants = self.loader.variants(product)
        if not variants:
            return self.default_currency
        entry = self.loader.current_price(variants[0])
        if entry is not None and entry.currency:
            return entry.currency
        return self.default_currency

    def default_variant(self, product: Product) -> ProductVariant | None:
        """Cheapest enabled variant; on equal prices the earlier one wins."""
        lowest: Decimal | None = None
        chosen: ProductVariant | None = None
        for variant in self.loader.variants(product):
            if not variant.enabled:
                continue
            entry = self.loader.current_price(variant)
            if entry is None or entry.price is None:
                continue
            if lowest is None or entry.price < lowest:
                lowest = entry.price
                chosen = variant
        return chosen

    def resolve(self, product: Product) -> ProductPricing:
        return ProductPricing(
            lowest_price=self.lowest_price(product),
            lowest_compare_at_price=self.lowest_compare_at_price(product),
            currency=self.currency(product),
            default_variant=self.default_variant(product),
        )


def _resolve_by_slug(session: Session, slug: str, default_currency: str | None) -> ProductPricing | None:
    product = session.execute(select(Product).where(Product.slug == slug)).scalars().first()
    if product is None:
        return None
    return PriceResolver(RelationLoader(session), default_currency).resolve(product)


async def resolve_product_pricing(
    db: AsyncSession,
    slug: str,
    default_currency: str | None = None,
) -> ProductPricing | None:
    """Run the resolver for ``slug`` from async code."""
    return await run_sync(db, _resolve_by_slug, slug, default_currency)
