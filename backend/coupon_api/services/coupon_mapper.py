"""Projections between coupon schemas and the Coupon model."""

from datetime import UTC, datetime

from coupon_api.models.coupon import Coupon, coupon_name_key
from coupon_api.models.shared import utc_now
from coupon_api.schemas.coupon import CouponCreate, CouponResponse, CouponUpdate


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class CouponMapper:
    def from_create(self, data: CouponCreate) -> Coupon:
        now = utc_now()
        return Coupon(
            name=data.name,
            name_key=coupon_name_key(data.name),
            percent=data.percent,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def from_update(self, data: CouponUpdate) -> Coupon:
        # Active flag and timestamps come from the stored row
        return Coupon(
            id=data.id,
            name=data.name,
            name_key=coupon_name_key(data.name),
            percent=data.percent,
        )

    def to_response(self, coupon: Coupon) -> CouponResponse:
        return CouponResponse(
            id=coupon.id,
            name=coupon.name,
            percent=coupon.percent,
            active=coupon.is_active,
            created=_as_utc(coupon.created_at),  # type: ignore[arg-type]
            last_updated=_as_utc(coupon.updated_at),  # type: ignore[arg-type]
        )
