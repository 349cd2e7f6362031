# commerce/services/relation_loader.py
"""Load-once access to the Product -> Variant -> UserProductVariant -> Price chain.

Every edge of the chain is materialised at most once per instance. Whether an
edge is already present is read from the instance state SQLAlchemy keeps
(``inspect(obj).unloaded``), so collections populated by an eager load
(``selectinload``), by an earlier call or by the caller building the graph in
memory are reused as they are.
"""

from __future__ import annotations

import threading
import weakref
from collections import Counter
from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.attributes import set_committed_value

from commerce.core.logging import get_logger
from commerce.models.product import (
    Product,
    ProductVariant,
    ProductVariantPrice,
    UserProductVariant,
)

logger = get_logger(__name__)

VARIANTS = "variants"
USER_PRODUCT_VARIANTS = "user_product_variants"
PRICES = "prices"


class RelationLoader:
    """Fetches missing relation collections through a sync ``Session``.

    ``fetch_count`` and ``fetches`` record how many round trips were made,
    keyed by relation name.
    """

    def __init__(self, session: Session):
        self.session = session
        self.fetch_count = 0
        self.fetches: Counter[str] = Counter()
        self._registry_lock = threading.Lock()
        self._locks: weakref.WeakKeyDictionary[Any, dict[str, threading.Lock]] = weakref.WeakKeyDictionary()

    # ---------------- state ----------------
    @staticmethod
    def is_loaded(instance: Any, relation: str) -> bool:
        state = inspect(instance)
        if state.key is None:
            # transient/pending: whatever is in memory is all there is
            return True
        return relation not in state.unloaded

    def _edge_lock(self, instance: Any, relation: str) -> threading.Lock:
        with self._registry_lock:
            edges = self._locks.setdefault(instance, {})
            lock = edges.get(relation)
            if lock is None:
                lock = edges[relation] = threading.Lock()
            return lock

    def _ensure(self, instance: Any, relation: str, fetch) -> list:
        if not self.is_loaded(instance, relation):
            with self._edge_lock(instance, relation):
                if not self.is_loaded(instance, relation):
                    rows = fetch(instance)
                    set_committed_value(instance, relation, rows)
                    with self._registry_lock:
                        self.fetch_count += 1
                        self.fetches[relation] += 1
                    logger.debug(
                        "Loaded relation",
                        extra={
                            "relation": relation,
                            "model": type(instance).__name__,
                            "instance_id": inspect(instance).identity,
                            "rows": len(rows),
                        },
                    )
        return getattr(instance, relation)

    # ---------------- fetches ----------------
    def _fetch_variants(self, product: Product) -> list[ProductVariant]:
        stmt = (
            select(ProductVariant)
            .where(ProductVariant.product_id == product.id)
            .options(
                selectinload(ProductVariant.user_product_variants)
                .selectinload(UserProductVariant.prices)
            )
            .order_by(ProductVariant.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def _fetch_user_product_variants(self, variant: ProductVariant) -> list[UserProductVariant]:
        stmt = (
            select(UserProductVariant)
            .where(UserProductVariant.product_variant_id == variant.id)
            .options(selectinload(UserProductVariant.prices))
            .order_by(UserProductVariant.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def _fetch_prices(self, user_variant: UserProductVariant) -> list[ProductVariantPrice]:
        stmt = (
            select(ProductVariantPrice)
            .where(ProductVariantPrice.user_product_variant_id == user_variant.id)
            .order_by(ProductVariantPrice.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    # ---------------- public ----------------
    def variants(self, product: Product) -> list[ProductVariant]:
        return self._ensure(product, VARIANTS, self._fetch_variants)

    def user_product_variants(self, variant: ProductVariant) -> list[UserProductVariant]:
        return self._ensure(variant, USER_PRODUCT_VARIANTS, self._fetch_user_product_variants)

    def prices(self, user_variant: UserProductVariant) -> list[ProductVariantPrice]:
        return self._ensure(user_variant, PRICES, self._fetch_prices)

    def current_price(self, variant: ProductVariant) -> ProductVariantPrice | None:
        """First price entry of the variant's first seller record, if any."""
        user_variants = self.user_product_variants(variant)
        if not user_variants:
            return None
        prices = self.prices(user_variants[0])
        if not prices:
            return None
        return prices[0]
