"""Shared builders for tests: settings, in-memory SQLite sessions and apps."""

from sqlalchemy.orm import Session

from cosmos.core.config import Settings
from cosmos.core.database import build_engine, build_session_factory
from cosmos.models import Base

TEST_SECRET = "test-secret-for-unit-tests"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass-123"
# bcrypt's minimum cost keeps hashing fast in tests.
FAST_BCRYPT_ROUNDS = 4


def make_settings(**overrides: object) -> Settings:
    """Build settings that ignore .env and point at a private in-memory database."""
    values: dict[str, object] = {
        "APP_ENV": "development",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "ADMIN_USERNAME": ADMIN_USERNAME,
        "ADMIN_EMAIL": "admin@example.com",
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session() -> Session:
    """Return a session bound to a fresh in-memory database with all tables created."""
    engine = build_engine(make_settings())
    Base.metadata.create_all(engine)
    return build_session_factory(engine)()
