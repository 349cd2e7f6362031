# commerce/models/product.py
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce.core.config import settings
from commerce.db.session import Base
from commerce.models.facet import product_facet_values
from commerce.models.user import User

_t = settings.table_name


# --- Product (catalog item, addressed externally by slug) ---
class Product(Base):
    __tablename__ = _t("products")

    ID_COLUMN = "slug"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    saleable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="active", nullable=False)

    # customs classification
    hscode: Mapped[str | None] = mapped_column(String(16), nullable=True)
    hstype: Mapped[str | None] = mapped_column(String(64), nullable=True)
    hsdescription: Mapped[str | None] = mapped_column(Text, nullable=True)

    # "metadata" is reserved on declarative classes
    metadata_json: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)

    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = mapped_column(DateTime(timezone=True), onupdate=func.now())

    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariant.id",
    )
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.sort_order",
    )
    facet_values = relationship("FacetValue", secondary=product_facet_values, back_populates="products")


# --- Variant (size/colour configuration of a product) ---
class ProductVariant(Base):
    __tablename__ = _t("product_variants")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{_t('products')}.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    attributes: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    product: Mapped[Product] = relationship(Product, back_populates="variants")
    user_product_variants: Mapped[list["UserProductVariant"]] = relationship(
        "UserProductVariant",
        back_populates="product_variant",
        cascade="all, delete-orphan",
        order_by="UserProductVariant.id",
    )


# --- Seller-specific layer over a variant: stock and pricing linkage ---
class UserProductVariant(Base):
    __tablename__ = _t("user_product_variants")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey(f"{_t('users')}.id", ondelete="SET NULL"), nullable=True
    )
    product_variant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{_t('product_variants')}.id", ondelete="CASCADE"), nullable=False, index=True
    )

    sku: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    stock_level: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_qty: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    max_qty: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship(User, back_populates="product_variants")
    product_variant: Mapped[ProductVariant] = relationship(ProductVariant, back_populates="user_product_variants")
    prices: Mapped[list["ProductVariantPrice"]] = relationship(
        "ProductVariantPrice",
        back_populates="user_product_variant",
        cascade="all, delete-orphan",
        order_by="ProductVariantPrice.id",
    )


class ProductVariantPrice(Base):
    __tablename__ = _t("product_variant_prices")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_product_variant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{_t('user_product_variants')}.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # NULL means "not for sale", never zero
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    compare_at_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(3), default=settings.DEFAULT_CURRENCY, nullable=True)

    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user_product_variant: Mapped[UserProductVariant] = relationship(UserProductVariant, back_populates="prices")


# --- Product images (URLs only, storage lives in the host app) ---
class ProductImage(Base):
    __tablename__ = _t("product_images")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{_t('products')}.id", ondelete="CASCADE"), nullable=False
    )

    url:       Mapped[str] = mapped_column(String(512), nullable=False)
    alt_text:  Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    product = relationship(Product, back_populates="images")
