from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from commerce.db.operations import flush_async
from commerce.models.facet import Facet, FacetValue
from commerce.models.product import Product
from commerce.services.exceptions import ResourceNotFoundError


async def get_or_create_facet(db: AsyncSession, slug: str, name: str, description: str | None = None) -> Facet:
    result = await db.execute(select(Facet).where(Facet.slug == slug))
    facet = result.scalars().first()
    if facet is None:
        facet = Facet(slug=slug, name=name, description=description)
        db.add(facet)
        await flush_async(db)
    return facet


async def get_or_create_facet_value(
    db: AsyncSession,
    facet: Facet,
    slug: str,
    name: str,
    description: str | None = None,
) -> FacetValue:
    result = await db.execute(
        select(FacetValue).where(FacetValue.facet_id == facet.id, FacetValue.slug == slug)
    )
    value = result.scalars().first()
    if value is None:
        value = FacetValue(facet_id=facet.id, slug=slug, name=name, description=description)
        db.add(value)
        await flush_async(db)
    return value


async def attach_facet_values(db: AsyncSession, product: Product, facet_value_ids: Iterable[int]) -> list[FacetValue]:
    """Attach facet values to ``product``; ids already attached are skipped."""
    wanted = list(dict.fromkeys(facet_value_ids))
    found: dict[int, FacetValue] = {}
    if wanted:
        result = await db.execute(select(FacetValue).where(FacetValue.id.in_(wanted)))
        found = {value.id: value for value in result.scalars().all()}
        missing = [value_id for value_id in wanted if value_id not in found]
        if missing:
            raise ResourceNotFoundError(f"Facet values not found: {missing}")

    result = await db.execute(
        select(Product).where(Product.id == product.id).options(selectinload(Product.facet_values))
    )
    product = result.scalars().one()
    attached = {value.id for value in product.facet_values}
    for value_id in wanted:
        if value_id not in attached:
            product.facet_values.append(found[value_id])

    await flush_async(db)
    return list(product.facet_values)
