# commerce/models/coupon.py
import enum
from decimal import Decimal

from sqlalchemy import Enum as SqlEnum, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from commerce.core.config import settings
from commerce.db.session import Base


class DiscountType(str, enum.Enum):
    percent = "percent"
    fixed = "fixed"


class CouponStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    expired = "expired"


class Coupon(Base):
    __tablename__ = settings.table_name("coupons")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    discount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount_type: Mapped[DiscountType] = mapped_column(SqlEnum(DiscountType), default=DiscountType.percent, nullable=False)
    status: Mapped[CouponStatus] = mapped_column(SqlEnum(CouponStatus), default=CouponStatus.active, nullable=False)
    usage_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    minimum_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
