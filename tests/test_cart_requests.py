# tests/test_cart_requests.py
import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from commerce.schemas.cart import StoreCartAddRequest, StoreCartRemoveRequest
from commerce.services import cart_requests
from commerce.services.exceptions import DomainValidationError, ResourceNotFoundError
from factories import build_product, build_variant, persist_product


# ---------- helpers ----------

def _seed_sneakers(db_session, merchant):
    product = persist_product(db_session, build_product(slug="classic-white-sneakers", variants=[
        build_variant(name="Size 42", price=3200, seller=merchant),
        build_variant(name="Size 40", price=2800, seller=merchant),
        build_variant(name="Size 38", enabled=False, price=1500, seller=merchant),
    ]))
    return {variant.name: variant.id for variant in product.variants}


# ---------- request shape ----------

def test_add_request_accepts_empty_payload():
    payload = StoreCartAddRequest.model_validate({})
    assert payload.product_variant_id is None
    assert payload.product_id is None
    assert payload.quantity is None


@pytest.mark.parametrize("body", [
    {"quantity": 0},
    {"quantity": -3},
    {"product_variant_id": "abc"},
    {"product_id": ""},
])
def test_add_request_rejects_bad_shapes(body):
    with pytest.raises(ValidationError):
        StoreCartAddRequest.model_validate(body)


def test_remove_request_requires_variant():
    with pytest.raises(ValidationError):
        StoreCartRemoveRequest.model_validate({})
    assert StoreCartRemoveRequest.model_validate({"product_variant_id": 7}).product_variant_id == 7


# ---------- existence checks ----------

@pytest.mark.asyncio
async def test_add_by_variant_id(db_session, merchant, async_db_session: AsyncSession):
    ids = _seed_sneakers(db_session, merchant)

    line = await cart_requests.validate_cart_add(
        async_db_session,
        StoreCartAddRequest(product_variant_id=ids["Size 42"], quantity=2),
    )

    assert line.variant.id == ids["Size 42"]
    assert line.quantity == 2


@pytest.mark.asyncio
async def test_add_unknown_variant(async_db_session: AsyncSession):
    with pytest.raises(ResourceNotFoundError):
        await cart_requests.validate_cart_add(
            async_db_session, StoreCartAddRequest(product_variant_id=999_999)
        )


@pytest.mark.asyncio
async def test_add_by_product_slug_uses_default_variant(db_session, merchant, async_db_session: AsyncSession):
    ids = _seed_sneakers(db_session, merchant)

    line = await cart_requests.validate_cart_add(
        async_db_session, StoreCartAddRequest(product_id="classic-white-sneakers")
    )

    assert line.variant.id == ids["Size 40"]
    assert line.quantity == 1


@pytest.mark.asyncio
async def test_add_by_unknown_slug(async_db_session: AsyncSession):
    with pytest.raises(ResourceNotFoundError):
        await cart_requests.validate_cart_add(
            async_db_session, StoreCartAddRequest(product_id="ghost-product")
        )


@pytest.mark.asyncio
async def test_add_product_without_purchasable_variant(db_session, merchant, async_db_session: AsyncSession):
    persist_product(db_session, build_product(slug="retro-sunglasses", variants=[
        build_variant(name="Unpriced", price=None, seller=merchant),
    ]))

    with pytest.raises(DomainValidationError) as exc:
        await cart_requests.validate_cart_add(
            async_db_session, StoreCartAddRequest(product_id="retro-sunglasses")
        )
    assert "retro-sunglasses" in exc.value.detail


@pytest.mark.asyncio
async def test_add_requires_variant_or_product(async_db_session: AsyncSession):
    with pytest.raises(DomainValidationError):
        await cart_requests.validate_cart_add(async_db_session, StoreCartAddRequest())


@pytest.mark.asyncio
async def test_remove_checks_variant_exists(db_session, merchant, async_db_session: AsyncSession):
    ids = _seed_sneakers(db_session, merchant)

    variant = await cart_requests.validate_cart_remove(
        async_db_session, StoreCartRemoveRequest(product_variant_id=ids["Size 38"])
    )
    assert variant.name == "Size 38"

    with pytest.raises(ResourceNotFoundError):
        await cart_requests.validate_cart_remove(
            async_db_session, StoreCartRemoveRequest(product_variant_id=424242)
        )
