# commerce/models/location.py
from decimal import Decimal

from sqlalchemy import Float, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from commerce.core.config import settings
from commerce.db.session import Base


class Location(Base):
    """Delivery zone with its flat delivery fee."""

    __tablename__ = settings.table_name("locations")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(160), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    delivery_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
