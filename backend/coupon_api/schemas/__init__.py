from coupon_api.schemas.coupon import CouponCreate, CouponResponse, CouponUpdate
from coupon_api.schemas.response import APIResponse, fail, ok

__all__ = [
    "APIResponse",
    "CouponCreate",
    "CouponResponse",
    "CouponUpdate",
    "fail",
    "ok",
]
