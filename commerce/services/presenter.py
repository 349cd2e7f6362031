from __future__ import annotations

from commerce.models.product import Product, ProductImage
from commerce.schemas.product import FacetValueRead, ProductImageRead, ProductRead, ProductVariantRead
from commerce.services.pricing import PriceResolver


def featured_image(images: list[ProductImage]) -> str | None:
    """Primary image URL, falling back to the first by sort order."""
    if not images:
        return None
    for image in images:
        if image.is_primary:
            return image.url
    return min(images, key=lambda image: image.sort_order).url


def present_product(product: Product, resolver: PriceResolver) -> ProductRead:
    pricing = resolver.resolve(product)
    variants = resolver.loader.variants(product)
    default_variant = pricing.default_variant
    return ProductRead(
        id=product.id,
        slug=product.slug,
        name=product.name,
        description=product.description,
        saleable=product.saleable,
        status=product.status,
        metadata=product.metadata_json,
        variants=[ProductVariantRead.model_validate(variant) for variant in variants],
        images=[ProductImageRead.model_validate(image) for image in product.images],
        facet_values=[FacetValueRead.model_validate(value) for value in product.facet_values],
        featured_image=featured_image(product.images),
        lowest_price=pricing.lowest_price,
        lowest_compare_at_price=pricing.lowest_compare_at_price,
        currency=pricing.currency,
        default_variant=ProductVariantRead.model_validate(default_variant) if default_variant else None,
    )
