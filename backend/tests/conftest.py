"""Shared test fixtures for all test modules."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import coupon_api.models  # noqa: F401
from coupon_api.core import database as db_module
from coupon_api.core.database import Base, get_db
from coupon_api.repositories.memory_coupon_repository import memory_table

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop them after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Also empties the in-memory coupon table.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)
    memory_table.reset()

    yield

    Base.metadata.drop_all(bind=_test_engine)
    memory_table.reset()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def client():
    """Create test client."""
    from coupon_api.main import app

    return TestClient(app)
