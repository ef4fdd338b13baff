"""Coupon repository for data access."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from coupon_api.core.exceptions import DuplicateNameError, StorageError
from coupon_api.models.coupon import Coupon, coupon_name_key
from coupon_api.models.shared import utc_now

logger = logging.getLogger(__name__)


class CouponStore(ABC):
    """Interface shared by every coupon repository.

    ``create``, ``update`` and ``remove`` only stage changes; nothing is
    durable until ``persist`` returns.
    """

    @abstractmethod
    def get_all(self) -> list[Coupon]:
        """Get all coupons ordered by id."""
        ...  # pragma: no cover

    @abstractmethod
    def get_by_id(self, coupon_id: int) -> Coupon | None:
        """Get a coupon by ID."""
        ...  # pragma: no cover

    @abstractmethod
    def get_by_name(self, name: str) -> Coupon | None:
        """Get a coupon by name, ignoring case."""
        ...  # pragma: no cover

    @abstractmethod
    def create(self, coupon: Coupon) -> None:
        """Stage a new coupon. Its id is assigned on persist."""
        ...  # pragma: no cover

    @abstractmethod
    def update(self, coupon: Coupon) -> Coupon | None:
        """Stage new name and percent for the stored coupon with ``coupon.id``.

        Returns the staged coupon, or None if no coupon has that id.
        """
        ...  # pragma: no cover

    @abstractmethod
    def remove(self, coupon: Coupon) -> None:
        """Stage deletion of a coupon."""
        ...  # pragma: no cover

    @abstractmethod
    def persist(self) -> None:
        """Commit all staged changes as one unit.

        Raises:
            DuplicateNameError: A staged name collides with a stored one.
            StorageError: The store failed; nothing was committed.
        """
        ...  # pragma: no cover


class CouponRepository(CouponStore):
    """Repository for Coupon model."""

    def __init__(self, db: Session):
        self.db = db
        self._staged: list[Coupon] = []

    @contextmanager
    def _store_call(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Coupon store failed to %s", action)
            raise StorageError(f"Failed to {action}") from exc

    def get_all(self) -> list[Coupon]:
        with self._store_call("list coupons"):
            return self.db.query(Coupon).order_by(Coupon.id.asc()).all()

    def get_by_id(self, coupon_id: int) -> Coupon | None:
        with self._store_call("load coupon"):
            return self.db.query(Coupon).filter(Coupon.id == coupon_id).first()

    def get_by_name(self, name: str) -> Coupon | None:
        with self._store_call("look up coupon name"):
            return (
                self.db.query(Coupon)
                .filter(Coupon.name_key == coupon_name_key(name))
                .first()
            )

    def create(self, coupon: Coupon) -> None:
        coupon.name_key = coupon_name_key(coupon.name)  # type: ignore[assignment,arg-type]
        self.db.add(coupon)
        self._staged.append(coupon)

    def update(self, coupon: Coupon) -> Coupon | None:
        existing = self.get_by_id(coupon.id)  # type: ignore[arg-type]
        if not existing:
            return None

        existing.name = coupon.name
        existing.name_key = coupon_name_key(coupon.name)  # type: ignore[assignment,arg-type]
        existing.percent = coupon.percent
        existing.updated_at = utc_now()  # type: ignore[assignment]
        self._staged.append(existing)
        return existing

    def remove(self, coupon: Coupon) -> None:
        self.db.delete(coupon)

    def persist(self) -> None:
        staged, self._staged = self._staged, []
        name = staged[-1].name if staged else ""
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Commit rejected, coupon name %r already exists", name)
            raise DuplicateNameError(str(name)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Coupon store failed to commit")
            raise StorageError("Failed to commit coupon changes") from exc

        with self._store_call("reload coupons"):
            for coupon in staged:
                self.db.refresh(coupon)
