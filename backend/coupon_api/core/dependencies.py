"""FastAPI dependency providers for the coupon endpoints."""

from fastapi import Depends
from sqlalchemy.orm import Session

from coupon_api.core.config import settings
from coupon_api.core.database import get_db
from coupon_api.repositories.coupon_repository import CouponRepository, CouponStore
from coupon_api.repositories.memory_coupon_repository import InMemoryCouponRepository
from coupon_api.services.coupon_mapper import CouponMapper
from coupon_api.services.coupon_service import CouponService
from coupon_api.services.coupon_validation import CouponValidator


def get_coupon_repository(db: Session = Depends(get_db)) -> CouponStore:
    """Return the repository selected by ``settings.COUPON_STORE``."""
    if settings.use_memory_store:
        return InMemoryCouponRepository()
    return CouponRepository(db)


def get_coupon_service(
    repository: CouponStore = Depends(get_coupon_repository),
) -> CouponService:
    return CouponService(repository, CouponValidator(repository), CouponMapper())
