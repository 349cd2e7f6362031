# commerce/models/facet.py
from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce.core.config import settings
from commerce.db.session import Base

_t = settings.table_name

product_facet_values = Table(
    _t("product_facet_values"),
    Base.metadata,
    Column("product_id", Integer, ForeignKey(f"{_t('products')}.id", ondelete="CASCADE"), primary_key=True),
    Column("facet_value_id", Integer, ForeignKey(f"{_t('facet_values')}.id", ondelete="CASCADE"), primary_key=True),
)


class Facet(Base):
    """A tagging dimension such as category, brand or collection."""

    __tablename__ = _t("facets")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(140), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(140), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    values: Mapped[list["FacetValue"]] = relationship(
        "FacetValue", back_populates="facet", cascade="all, delete-orphan"
    )


class FacetValue(Base):
    __tablename__ = _t("facet_values")
    __table_args__ = (
        UniqueConstraint("facet_id", "slug", name=f"uq_{_t('facet_values')}_facet_slug"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    facet_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{_t('facets')}.id", ondelete="CASCADE"), nullable=False
    )
    slug: Mapped[str] = mapped_column(String(140), nullable=False)
    name: Mapped[str] = mapped_column(String(140), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    facet: Mapped[Facet] = relationship(Facet, back_populates="values")
    products = relationship("Product", secondary=product_facet_values, back_populates="facet_values")
