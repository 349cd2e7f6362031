from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from commerce.core.logging import get_logger
from commerce.db.operations import run_sync
from commerce.models.product import Product, ProductVariant
from commerce.schemas.cart import CartLine, StoreCartAddRequest, StoreCartRemoveRequest
from commerce.services.exceptions import DomainValidationError, ResourceNotFoundError
from commerce.services.pricing import PriceResolver
from commerce.services.relation_loader import RelationLoader

logger = get_logger(__name__)


async def _get_variant(db: AsyncSession, variant_id: int) -> ProductVariant:
    variant = await db.get(ProductVariant, variant_id)
    if variant is None:
        raise ResourceNotFoundError(f"Product variant {variant_id} not found")
    return variant


def _default_variant_for(session: Session, slug: str) -> ProductVariant | None:
    product = session.execute(
        select(Product).where(Product.slug == slug)
    ).scalars().first()
    if product is None:
        raise ResourceNotFoundError(f"Product '{slug}' not found")
    return PriceResolver(RelationLoader(session)).default_variant(product)


async def validate_cart_add(db: AsyncSession, payload: StoreCartAddRequest) -> CartLine:
    """Resolve an add-to-cart request into the variant and quantity to add.

    An explicit ``product_variant_id`` wins; otherwise the product's default
    variant is used.
    """
    quantity = payload.quantity or 1

    if payload.product_variant_id is not None:
        variant = await _get_variant(db, payload.product_variant_id)
        return CartLine(variant=variant, quantity=quantity)

    if payload.product_id is None:
        raise DomainValidationError("Either product_variant_id or product_id is required")

    variant = await run_sync(db, _default_variant_for, payload.product_id)
    if variant is None:
        logger.info("Product without purchasable variant", extra={"product_slug": payload.product_id})
        raise DomainValidationError(f"Product '{payload.product_id}' has no purchasable variant")
    return CartLine(variant=variant, quantity=quantity)


async def validate_cart_remove(db: AsyncSession, payload: StoreCartRemoveRequest) -> ProductVariant:
    return await _get_variant(db, payload.product_variant_id)
