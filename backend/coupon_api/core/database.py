from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from coupon_api.core.config import settings


def engine_options(dsn: str, timeout_seconds: float) -> dict[str, Any]:
    """Keyword arguments for ``create_engine`` bounding each store call.

    SQLite waits at most ``timeout_seconds`` on a locked database; PostgreSQL
    bounds connecting and every statement. Pooled engines also bound checkout.
    """
    options: dict[str, Any] = {"pool_pre_ping": True}
    if dsn.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False, "timeout": timeout_seconds}
        # In-memory SQLite uses a single-connection pool without a checkout timeout
        if dsn in ("sqlite://", "sqlite:///:memory:"):
            return options
    elif dsn.startswith("postgresql"):
        options["connect_args"] = {
            "connect_timeout": max(1, int(timeout_seconds)),
            "options": f"-c statement_timeout={int(timeout_seconds * 1000)}",
        }
    options["pool_timeout"] = timeout_seconds
    return options


engine = create_engine(
    settings.APP_DATABASE_DSN,
    **engine_options(settings.APP_DATABASE_DSN, settings.DATABASE_TIMEOUT_SECONDS),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize database tables."""
    # Register models on the metadata before creating tables
    import coupon_api.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
