"""Exceptions raised by the persistence layer."""


class CouponAPIError(Exception):
    """Base class for coupon API errors."""


class StorageError(CouponAPIError):
    """The store failed or timed out; staged changes were rolled back."""


class DuplicateNameError(CouponAPIError):
    """The store rejected a commit because the coupon name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Coupon name '{name}' already exists")
        self.name = name
