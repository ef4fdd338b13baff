from coupon_api.models.coupon import Coupon, coupon_name_key

__all__ = [
    "Coupon",
    "coupon_name_key",
]
