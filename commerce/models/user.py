# commerce/models/user.py
from __future__ import annotations

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce.core.config import settings
from commerce.db.session import Base


class User(Base):
    """Merchant (tenant) owning per-seller variant records."""

    __tablename__ = settings.table_name("users")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    created_at = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    product_variants = relationship("UserProductVariant", back_populates="user")
