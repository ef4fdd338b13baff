from coupon_api.repositories.coupon_repository import CouponRepository, CouponStore
from coupon_api.repositories.memory_coupon_repository import (
    CouponTable,
    InMemoryCouponRepository,
    memory_table,
)

__all__ = [
    "CouponRepository",
    "CouponStore",
    "CouponTable",
    "InMemoryCouponRepository",
    "memory_table",
]
