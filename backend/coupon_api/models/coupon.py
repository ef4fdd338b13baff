"""Coupon model for percentage discounts."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from coupon_api.core.database import Base
from coupon_api.models.shared import utc_now


def coupon_name_key(name: str) -> str:
    """Case-insensitive comparison key for a coupon name."""
    return name.casefold()


class Coupon(Base):
    """Coupon model for percentage discounts."""

    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    # casefold() may lengthen a name (e.g. "ß" -> "ss")
    name_key = Column(String(1024), unique=True, index=True, nullable=False)
    percent = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    def __repr__(self) -> str:
        return f"<Coupon id={self.id} name={self.name!r} percent={self.percent}>"
