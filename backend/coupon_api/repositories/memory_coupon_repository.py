"""Process-wide in-memory coupon store."""

from dataclasses import dataclass, field
from threading import Lock

from coupon_api.core.exceptions import DuplicateNameError, StorageError
from coupon_api.models.coupon import Coupon, coupon_name_key
from coupon_api.models.shared import utc_now
from coupon_api.repositories.coupon_repository import CouponStore


def _copy(coupon: Coupon) -> Coupon:
    return Coupon(
        id=coupon.id,
        name=coupon.name,
        name_key=coupon_name_key(str(coupon.name)),
        percent=coupon.percent,
        is_active=coupon.is_active,
        created_at=coupon.created_at,
        updated_at=coupon.updated_at,
    )


@dataclass
class CouponTable:
    """Id to coupon mapping guarded by a single mutation lock."""

    rows: dict[int, Coupon] = field(default_factory=dict)
    next_id: int = 1
    lock: Lock = field(default_factory=Lock)

    def reset(self) -> None:
        """Drop every row (useful for testing)."""
        with self.lock:
            self.rows.clear()
            self.next_id = 1


memory_table = CouponTable()


class InMemoryCouponRepository(CouponStore):
    """Repository backed by a shared ``CouponTable``.

    Reads hand out copies; the table itself never leaves this class.
    """

    def __init__(self, table: CouponTable | None = None):
        self.table = table if table is not None else memory_table
        self._staged: list[tuple[str, Coupon]] = []

    def get_all(self) -> list[Coupon]:
        with self.table.lock:
            return [_copy(self.table.rows[key]) for key in sorted(self.table.rows)]

    def get_by_id(self, coupon_id: int) -> Coupon | None:
        with self.table.lock:
            coupon = self.table.rows.get(coupon_id)
            return _copy(coupon) if coupon is not None else None

    def get_by_name(self, name: str) -> Coupon | None:
        wanted = coupon_name_key(name)
        with self.table.lock:
            for coupon in self.table.rows.values():
                if coupon.name_key == wanted:
                    return _copy(coupon)
        return None

    def create(self, coupon: Coupon) -> None:
        self._staged.append(("create", coupon))

    def update(self, coupon: Coupon) -> Coupon | None:
        existing = self.get_by_id(coupon.id)  # type: ignore[arg-type]
        if existing is None:
            return None

        existing.name = coupon.name
        existing.name_key = coupon_name_key(str(coupon.name))  # type: ignore[assignment]
        existing.percent = coupon.percent
        existing.updated_at = utc_now()  # type: ignore[assignment]
        self._staged.append(("update", existing))
        return existing

    def remove(self, coupon: Coupon) -> None:
        self._staged.append(("remove", coupon))

    def persist(self) -> None:
        staged, self._staged = self._staged, []
        with self.table.lock:
            rows = dict(self.table.rows)
            next_id = self.table.next_id
            created: list[tuple[Coupon, int]] = []

            for op, coupon in staged:
                if op == "remove":
                    rows.pop(coupon.id, None)  # type: ignore[call-overload]
                    continue

                if op == "update" and coupon.id not in rows:
                    raise StorageError(f"Coupon {coupon.id} no longer exists")

                row_id = coupon.id if op == "update" else next_id
                wanted = coupon_name_key(str(coupon.name))
                for other_id, other in rows.items():
                    if other_id != row_id and other.name_key == wanted:
                        raise DuplicateNameError(str(coupon.name))

                if op == "create":
                    next_id += 1
                    created.append((coupon, row_id))  # type: ignore[arg-type]
                row = _copy(coupon)
                row.id = row_id
                rows[row_id] = row  # type: ignore[index]

            self.table.rows = rows
            self.table.next_id = next_id

        for coupon, row_id in created:
            coupon.id = row_id  # type: ignore[assignment]
