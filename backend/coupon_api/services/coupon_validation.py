"""Declarative validation rules for coupon input."""

from collections.abc import Callable
from dataclasses import dataclass

from coupon_api.repositories.coupon_repository import CouponStore
from coupon_api.schemas.coupon import CouponCreate, CouponUpdate

CouponInput = CouponCreate | CouponUpdate

MIN_PERCENT = 1
MAX_PERCENT = 100


@dataclass(frozen=True)
class ValidationRule:
    """A predicate over the input and a read-only store, plus its failure message.

    ``message`` is formatted with the input's fields.
    """

    check: Callable[[CouponInput, CouponStore], bool]
    message: str

    def describe(self, data: CouponInput) -> str:
        return self.message.format(**data.model_dump())


def _name_present(data: CouponInput, store: CouponStore) -> bool:
    return bool(data.name.strip())


def _name_unique(data: CouponInput, store: CouponStore) -> bool:
    if not data.name.strip():
        return True
    existing = store.get_by_name(data.name)
    if existing is None:
        return True
    # An update may keep its own name
    return isinstance(data, CouponUpdate) and existing.id == data.id


def _percent_in_range(data: CouponInput, store: CouponStore) -> bool:
    return MIN_PERCENT <= data.percent <= MAX_PERCENT


COUPON_RULES: list[ValidationRule] = [
    ValidationRule(_name_present, "'Name' must not be empty."),
    ValidationRule(_name_unique, "This Coupon Name already exists."),
    ValidationRule(
        _percent_in_range,
        f"'Percent' must be between {MIN_PERCENT} and {MAX_PERCENT}. You entered {{percent}}.",
    ),
]


class CouponValidator:
    """Evaluates ``COUPON_RULES`` in order against create and update input."""

    def __init__(self, store: CouponStore, rules: list[ValidationRule] | None = None):
        self.store = store
        self.rules = rules if rules is not None else COUPON_RULES

    def validate(self, data: CouponInput) -> list[str]:
        """Return the message of every violated rule; empty when valid."""
        return [rule.describe(data) for rule in self.rules if not rule.check(data, self.store)]
