"""Tests for CouponService request handling."""

import pytest

from coupon_api.core.exceptions import StorageError
from coupon_api.repositories.coupon_repository import CouponRepository
from coupon_api.repositories.memory_coupon_repository import CouponTable, InMemoryCouponRepository
from coupon_api.schemas.coupon import CouponCreate, CouponResponse, CouponUpdate
from coupon_api.services.coupon_mapper import CouponMapper
from coupon_api.services.coupon_service import CouponService
from coupon_api.services.coupon_validation import CouponValidator


def _service(repo, rules=None):
    return CouponService(repo, CouponValidator(repo, rules=rules), CouponMapper())


@pytest.fixture
def repo():
    return InMemoryCouponRepository(CouponTable())


@pytest.fixture
def service(repo):
    return _service(repo)


class TestCreate:
    """Tests for CouponService.create_coupon."""

    def test_create(self, service):
        """Test a valid coupon is stored and returned with its id."""
        result = service.create_coupon(CouponCreate(name="SAVE10", percent=10))

        envelope = result.response
        assert envelope.is_success is True
        assert envelope.status_code == 201
        assert envelope.error_messages == []
        assert isinstance(envelope.result, CouponResponse)
        assert envelope.result.id == result.created_id == 1
        assert envelope.result.active is True

    def test_create_invalid(self, service, repo):
        """Test a rejected create reports one message and stores nothing."""
        result = service.create_coupon(CouponCreate(name="", percent=500))

        assert result.response.is_success is False
        assert result.response.status_code == 400
        assert result.response.error_messages == ["'Name' must not be empty."]
        assert result.created_id is None
        assert repo.get_all() == []

    def test_commit_time_duplicate(self, db_session):
        """Test a duplicate that slips past validation is caught by the store."""
        service = _service(CouponRepository(db_session), rules=[])
        assert service.create_coupon(CouponCreate(name="SAVE10", percent=10)).created_id == 1

        result = service.create_coupon(CouponCreate(name="save10", percent=20))

        assert result.response.status_code == 400
        assert result.response.error_messages == ["This Coupon Name already exists."]
        assert len(service.list_coupons().response.result) == 1

    def test_commit_time_duplicate_memory(self, repo):
        """Test the in-memory store catches duplicates validation missed."""
        service = _service(repo, rules=[])
        service.create_coupon(CouponCreate(name="SAVE10", percent=10))

        result = service.create_coupon(CouponCreate(name="Save10", percent=20))

        assert result.response.error_messages == ["This Coupon Name already exists."]


class TestGetAndList:
    """Tests for CouponService.get_coupon and list_coupons."""

    def test_list(self, service):
        """Test list returns output shapes for every coupon."""
        service.create_coupon(CouponCreate(name="A", percent=1))
        service.create_coupon(CouponCreate(name="B", percent=2))

        envelope = service.list_coupons().response
        assert envelope.status_code == 200
        assert {c.name for c in envelope.result} == {"A", "B"}

    def test_get_missing(self, service):
        """Test a missing coupon yields a 404 envelope."""
        envelope = service.get_coupon(42).response
        assert envelope.is_success is False
        assert envelope.status_code == 404
        assert envelope.result is None
        assert envelope.error_messages == ["Coupon not found"]


class TestUpdate:
    """Tests for CouponService.update_coupon."""

    def test_update(self, service):
        """Test a valid update returns 202 with the stored values."""
        created = service.create_coupon(CouponCreate(name="SAVE10", percent=10)).response.result

        envelope = service.update_coupon(1, CouponUpdate(id=1, name="SAVE10", percent=25)).response

        assert envelope.status_code == 202
        assert envelope.result.percent == 25
        assert envelope.result.created == created.created
        assert envelope.result.last_updated >= created.last_updated

    def test_update_unknown_id(self, service, repo):
        """Test an unknown id is rejected before validation runs."""
        envelope = service.update_coupon(9, CouponUpdate(id=9, name="", percent=0)).response
        assert envelope.status_code == 400
        assert envelope.error_messages == ["Invalid Id For Coupon"]
        assert repo.get_all() == []

    def test_update_invalid(self, service, repo):
        """Test a rejected update leaves the coupon unchanged."""
        service.create_coupon(CouponCreate(name="SAVE10", percent=10))

        envelope = service.update_coupon(1, CouponUpdate(id=1, name="SAVE10", percent=0)).response

        assert envelope.status_code == 400
        assert envelope.error_messages == ["'Percent' must be between 1 and 100. You entered 0."]
        assert repo.get_by_id(1).percent == 10


class TestDelete:
    """Tests for CouponService.delete_coupon."""

    def test_delete(self, service, repo):
        """Test delete returns a 204 envelope and removes the coupon."""
        service.create_coupon(CouponCreate(name="SAVE10", percent=10))

        envelope = service.delete_coupon(1).response

        assert envelope.is_success is True
        assert envelope.status_code == 204
        assert envelope.result is None
        assert envelope.error_messages == []
        assert repo.get_all() == []

    def test_delete_unknown_id(self, service):
        """Test deleting an unknown id is rejected."""
        envelope = service.delete_coupon(1).response
        assert envelope.status_code == 400
        assert envelope.error_messages == ["Error, Invalid ID"]


class TestStorageErrors:
    """Storage errors are not turned into envelopes by the service."""

    def test_persist_failure_propagates(self, repo):
        """Test a StorageError from persist reaches the caller."""

        class FailingRepository(InMemoryCouponRepository):
            def persist(self):
                raise StorageError("Failed to commit coupon changes")

        failing = FailingRepository(repo.table)
        service = _service(failing)

        with pytest.raises(StorageError):
            service.create_coupon(CouponCreate(name="SAVE10", percent=10))
        assert repo.get_all() == []
