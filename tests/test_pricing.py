# tests/test_pricing.py
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from commerce.models.product import ProductVariantPrice, UserProductVariant
from commerce.services.pricing import PriceResolver, ProductPricing
from commerce.services.relation_loader import RelationLoader
from factories import NO_PRICE, NO_SELLER, build_product, build_variant, persist_product


@pytest.fixture
def resolver(db_session: Session) -> PriceResolver:
    return PriceResolver(RelationLoader(db_session), default_currency="KES")


# ---------- empty catalog ----------

def test_product_without_variants(resolver: PriceResolver):
    product = build_product()

    assert resolver.lowest_price(product) is None
    assert resolver.lowest_compare_at_price(product) is None
    assert resolver.default_variant(product) is None
    assert resolver.currency(product) == "KES"


def test_persisted_product_without_variants_uses_configured_currency(db_session: Session):
    product = persist_product(db_session, build_product())
    resolver = PriceResolver(RelationLoader(db_session), default_currency="USD")

    assert resolver.currency(product) == "USD"
    assert resolver.lowest_price(product) is None
    assert resolver.default_variant(product) is None


# ---------- lowest price ----------

def test_lowest_price_picks_minimum(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="Large", price=500),
        build_variant(name="Small", price=300),
    ])

    assert resolver.lowest_price(product) == Decimal("300")


def test_null_price_never_counts(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="Not for sale", price=None, compare_at_price=1),
        build_variant(name="Regular", price=700, compare_at_price=900),
    ])

    assert resolver.lowest_price(product) == Decimal("700")
    assert resolver.lowest_compare_at_price(product) == Decimal("1")


def test_all_null_prices_yield_none(resolver: PriceResolver):
    product = build_product(variants=[build_variant(price=None), build_variant(price=None)])

    assert resolver.lowest_price(product) is None
    assert resolver.default_variant(product) is None


def test_zero_price_is_a_real_price(resolver: PriceResolver):
    product = build_product(variants=[build_variant(price=250), build_variant(price=0)])

    assert resolver.lowest_price(product) == Decimal("0")


def test_variants_without_seller_or_price_are_skipped(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="No seller", seller=NO_SELLER),
        build_variant(name="No price", entry=NO_PRICE),
        build_variant(name="Priced", price=1200),
    ])

    assert resolver.lowest_price(product) == Decimal("1200")
    assert resolver.default_variant(product).name == "Priced"


def test_price_and_compare_at_price_are_independent(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="A", price=100, compare_at_price=900),
        build_variant(name="B", price=200, compare_at_price=250),
    ])

    assert resolver.lowest_price(product) == Decimal("100")
    assert resolver.lowest_compare_at_price(product) == Decimal("250")


def test_only_first_seller_record_and_first_price_count(resolver: PriceResolver):
    variant = build_variant(name="Layered", price=400)
    # a second price on the first seller record and a cheaper second seller record
    variant.user_product_variants[0].prices.append(ProductVariantPrice(price=Decimal("50"), currency="KES"))
    second_seller = UserProductVariant(sku="SKU-SECOND", stock_level=3, min_qty=1)
    second_seller.prices.append(ProductVariantPrice(price=Decimal("10"), currency="KES"))
    variant.user_product_variants.append(second_seller)
    product = build_product(variants=[variant])

    assert resolver.lowest_price(product) == Decimal("400")


# ---------- default variant ----------

def test_default_variant_is_cheapest(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="Large", price=500),
        build_variant(name="Small", price=300),
    ])

    assert resolver.default_variant(product).name == "Small"


def test_default_variant_tie_keeps_first_seen(resolver: PriceResolver):
    first = build_variant(name="First", price=300)
    second = build_variant(name="Second", price=300)
    product = build_product(variants=[first, second])

    assert resolver.default_variant(product) is first


def test_disabled_variant_is_never_default(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="Clearance", enabled=False, price=100),
        build_variant(name="Regular", price=500),
    ])

    assert resolver.default_variant(product).name == "Regular"
    # disabled variants still count towards the display price
    assert resolver.lowest_price(product) == Decimal("100")


def test_only_disabled_variants_have_no_default(resolver: PriceResolver):
    product = build_product(variants=[build_variant(enabled=False, price=100)])

    assert resolver.default_variant(product) is None


# ---------- currency ----------

def test_currency_comes_from_first_variant(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="US", price=900, currency="USD"),
        build_variant(name="EU", price=100, currency="EUR"),
    ])

    assert resolver.currency(product) == "USD"


def test_currency_falls_back_when_first_variant_has_none(resolver: PriceResolver):
    product = build_product(variants=[
        build_variant(name="No seller", seller=NO_SELLER),
        build_variant(name="EU", price=100, currency="EUR"),
    ])

    assert resolver.currency(product) == "KES"


def test_currency_falls_back_on_blank_price_currency(db_session: Session):
    product = build_product(variants=[build_variant(price=100, currency=None)])
    resolver = PriceResolver(RelationLoader(db_session), default_currency="UGX")

    assert resolver.currency(product) == "UGX"


# ---------- persisted graphs ----------

def test_persisted_graph_resolves_in_primary_key_order(db_session: Session, merchant):
    product = persist_product(db_session, build_product(variants=[
        build_variant(name="First", price=300, compare_at_price=450, currency="USD", seller=merchant),
        build_variant(name="Second", price=300, compare_at_price=350, currency="EUR", seller=merchant),
        build_variant(name="Third", enabled=False, price=120, currency="EUR", seller=merchant),
    ]))
    resolver = PriceResolver(RelationLoader(db_session), default_currency="KES")

    pricing = resolver.resolve(product)

    assert isinstance(pricing, ProductPricing)
    assert pricing.lowest_price == Decimal("120.00")
    assert pricing.lowest_compare_at_price == Decimal("350.00")
    assert pricing.currency == "USD"
    assert pricing.default_variant.name == "First"


def test_values_are_recomputed_on_each_call(resolver: PriceResolver):
    variant = build_variant(price=500)
    product = build_product(variants=[variant])
    assert resolver.lowest_price(product) == Decimal("500")

    variant.user_product_variants[0].prices[0].price = Decimal("450")

    assert resolver.lowest_price(product) == Decimal("450")
