"""Coupon request handling: validate, map, persist, and wrap in an envelope."""

import logging
from dataclasses import dataclass

from coupon_api.core.exceptions import DuplicateNameError
from coupon_api.repositories.coupon_repository import CouponStore
from coupon_api.schemas.coupon import CouponCreate, CouponUpdate
from coupon_api.schemas.response import APIResponse, fail, ok
from coupon_api.services.coupon_mapper import CouponMapper
from coupon_api.services.coupon_validation import CouponValidator

logger = logging.getLogger(__name__)

COUPON_NOT_FOUND = "Coupon not found"
INVALID_UPDATE_ID = "Invalid Id For Coupon"
INVALID_DELETE_ID = "Error, Invalid ID"
NAME_TAKEN = "This Coupon Name already exists."


@dataclass
class ServiceResult:
    """Envelope to send back, plus the id of a newly created coupon."""

    response: APIResponse
    created_id: int | None = None


class CouponService:
    """Orchestrates the coupon endpoints over explicit collaborators.

    Validation failures and unknown ids come back as failure envelopes.
    ``StorageError`` from the repository is left to propagate.
    """

    def __init__(
        self,
        repository: CouponStore,
        validator: CouponValidator,
        mapper: CouponMapper,
    ) -> None:
        self.repository = repository
        self.validator = validator
        self.mapper = mapper

    def list_coupons(self) -> ServiceResult:
        coupons = self.repository.get_all()
        return ServiceResult(ok([self.mapper.to_response(c) for c in coupons]))

    def get_coupon(self, coupon_id: int) -> ServiceResult:
        coupon = self.repository.get_by_id(coupon_id)
        if coupon is None:
            return ServiceResult(fail(COUPON_NOT_FOUND, status_code=404))
        return ServiceResult(ok(self.mapper.to_response(coupon)))

    def create_coupon(self, data: CouponCreate) -> ServiceResult:
        """Validate and store a new coupon.

        Only the first violated rule is reported. The payload is the stored
        coupon, including its new id.
        """
        errors = self.validator.validate(data)
        if errors:
            logger.warning("Rejected coupon %r: %s", data.name, errors[0])
            return ServiceResult(fail(errors[0]))

        coupon = self.mapper.from_create(data)
        self.repository.create(coupon)
        try:
            self.repository.persist()
        except DuplicateNameError:
            return ServiceResult(fail(NAME_TAKEN))

        logger.info("Created coupon %s (%s)", coupon.id, coupon.name)
        return ServiceResult(
            ok(self.mapper.to_response(coupon), status_code=201),
            created_id=coupon.id,  # type: ignore[arg-type]
        )

    def update_coupon(self, coupon_id: int, data: CouponUpdate) -> ServiceResult:
        """Replace name and percent of an existing coupon.

        The body id must match ``coupon_id``. The coupon's own name does not
        count as a duplicate.
        """
        if data.id != coupon_id or self.repository.get_by_id(coupon_id) is None:
            logger.warning("Rejected update for unknown coupon %s", coupon_id)
            return ServiceResult(fail(INVALID_UPDATE_ID))

        errors = self.validator.validate(data)
        if errors:
            logger.warning("Rejected update of coupon %s: %s", coupon_id, errors[0])
            return ServiceResult(fail(errors[0]))

        if self.repository.update(self.mapper.from_update(data)) is None:
            return ServiceResult(fail(INVALID_UPDATE_ID))
        try:
            self.repository.persist()
        except DuplicateNameError:
            return ServiceResult(fail(NAME_TAKEN))

        updated = self.repository.get_by_id(coupon_id)
        if updated is None:
            return ServiceResult(fail(INVALID_UPDATE_ID))
        logger.info("Updated coupon %s", coupon_id)
        return ServiceResult(ok(self.mapper.to_response(updated), status_code=202))

    def delete_coupon(self, coupon_id: int) -> ServiceResult:
        coupon = self.repository.get_by_id(coupon_id)
        if coupon is None:
            logger.warning("Rejected delete for unknown coupon %s", coupon_id)
            return ServiceResult(fail(INVALID_DELETE_ID))

        self.repository.remove(coupon)
        self.repository.persist()
        logger.info("Deleted coupon %s", coupon_id)
        return ServiceResult(ok(None, status_code=204))
