"""Shared test wiring: in-memory SQLite, test settings and a TestClient with overrides."""

from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from acquisitions.core.config import Settings
from acquisitions.models import Base

TEST_PASSWORD = "secret123"


def make_settings(**overrides: object) -> Settings:
    """Settings with a fixed secret and the cheapest bcrypt cost."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": SecretStr("test-secret"),
        "JWT_EXPIRE_MINUTES": 60,
        "BCRYPT_ROUNDS": 4,
        "AUTH_COOKIE_SECURE": False,
    }
    values.update(overrides)
    return Settings(**values)


def make_engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


def make_sessionmaker(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
