"""commerce catalog

Revision ID: 3c9d1e7a5b20
Revises:
Create Date: 2026-10-19 10:12:41.381204
"""
from __future__ import annotations

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

from commerce.core.config import settings

# revision identifiers, used by Alembic.
revision: str = "3c9d1e7a5b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_t = settings.table_name


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        _t("users"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        _t("products"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("saleable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="active"),
        sa.Column("hscode", sa.String(length=16), nullable=True),
        sa.Column("hstype", sa.String(length=64), nullable=True),
        sa.Column("hsdescription", sa.Text(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        _t("product_variants"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey(f"{_t('products')}.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("attributes", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index(f"ix_{_t('product_variants')}_product_id", _t("product_variants"), ["product_id"])

    op.create_table(
        _t("user_product_variants"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey(f"{_t('users')}.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "product_variant_id",
            sa.Integer(),
            sa.ForeignKey(f"{_t('product_variants')}.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("sku", sa.String(length=64), nullable=False, unique=True),
        sa.Column("stock_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("min_qty", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_qty", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        f"ix_{_t('user_product_variants')}_product_variant_id",
        _t("user_product_variants"),
        ["product_variant_id"],
    )

    op.create_table(
        _t("product_variant_prices"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_product_variant_id",
            sa.Integer(),
            sa.ForeignKey(f"{_t('user_product_variants')}.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column("compare_at_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=True, server_default=settings.DEFAULT_CURRENCY),
        *_timestamps(),
    )
    op.create_index(
        f"ix_{_t('product_variant_prices')}_user_product_variant_id",
        _t("product_variant_prices"),
        ["user_product_variant_id"],
    )

    op.create_table(
        _t("product_images"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey(f"{_t('products')}.id", ondelete="CASCADE"), nullable=False),
        sa.Column("url", sa.String(length=512), nullable=False),
        sa.Column("alt_text", sa.String(length=200), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        _t("facets"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=140), nullable=False, unique=True),
        sa.Column("name", sa.String(length=140), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
    )

    op.create_table(
        _t("facet_values"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("facet_id", sa.Integer(), sa.ForeignKey(f"{_t('facets')}.id", ondelete="CASCADE"), nullable=False),
        sa.Column("slug", sa.String(length=140), nullable=False),
        sa.Column("name", sa.String(length=140), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.UniqueConstraint("facet_id", "slug", name=f"uq_{_t('facet_values')}_facet_slug"),
    )

    op.create_table(
        _t("product_facet_values"),
        sa.Column(
            "product_id", sa.Integer(), sa.ForeignKey(f"{_t('products')}.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "facet_value_id",
            sa.Integer(),
            sa.ForeignKey(f"{_t('facet_values')}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        _t("locations"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=160), nullable=False, unique=True),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("delivery_fee", sa.Numeric(10, 2), nullable=False, server_default="0"),
    )

    discount_type = sa.Enum("percent", "fixed", name="discounttype")
    coupon_status = sa.Enum("active", "inactive", "expired", name="couponstatus")
    op.create_table(
        _t("coupons"),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=64), nullable=False, unique=True),
        sa.Column("discount", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount_type", discount_type, nullable=False),
        sa.Column("status", coupon_status, nullable=False),
        sa.Column("usage_limit", sa.Integer(), nullable=True),
        sa.Column("minimum_amount", sa.Numeric(10, 2), nullable=True),
    )


def downgrade() -> None:
    op.drop_table(_t("coupons"))
    sa.Enum(name="couponstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="discounttype").drop(op.get_bind(), checkfirst=True)
    op.drop_table(_t("locations"))
    op.drop_table(_t("product_facet_values"))
    op.drop_table(_t("facet_values"))
    op.drop_table(_t("facets"))
    op.drop_table(_t("product_images"))
    op.drop_index(f"ix_{_t('product_variant_prices')}_user_product_variant_id", table_name=_t("product_variant_prices"))
    op.drop_table(_t("product_variant_prices"))
    op.drop_index(f"ix_{_t('user_product_variants')}_product_variant_id", table_name=_t("user_product_variants"))
    op.drop_table(_t("user_product_variants"))
    op.drop_index(f"ix_{_t('product_variants')}_product_id", table_name=_t("product_variants"))
    op.drop_table(_t("product_variants"))
    op.drop_table(_t("products"))
    op.drop_table(_t("users"))
