"""Application configuration loaded from environment variables."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
    "sqlite://",
)

# Used only in development when JWT_SECRET is unset; never accepted in production.
DEV_FALLBACK_JWT_SECRET = "cosmos-development-secret-do-not-use-in-production"

VALID_SSL_MODES = frozenset(
    {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["development", "production"] = "development"
    APP_PORT: int = 8080
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Postgres connection parts; DATABASE_URL (when set) takes precedence.
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: SecretStr = SecretStr("postgres")
    DB_NAME: str = "cosmos"
    DB_SSL_MODE: str = "disable"
    DATABASE_URL: str | None = None

    # JWT authentication
    JWT_SECRET: SecretStr | None = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_HOURS: int = 24
    AUTH_COOKIE_NAME: str = "auth_token"

    # Bootstrap administrator, created at startup when missing.
    ADMIN_EMAIL: str = "admin@cosmos.local"
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: SecretStr = SecretStr("admin123")

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL or SQLite URL (e.g. postgresql+psycopg2:// or sqlite://)"
            )
        return v.strip()

    @field_validator("DB_SSL_MODE")
    @classmethod
    def validate_ssl_mode(cls, v: str) -> str:
        s = v.strip().lower()
        if s not in VALID_SSL_MODES:
            raise ValueError(f"DB_SSL_MODE must be one of {sorted(VALID_SSL_MODES)}")
        return s

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr | None) -> SecretStr | None:
        # Blank values count as unset so the startup check can flag them.
        if v is None or not v.get_secret_value().strip():
            return None
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_HOURS")
    @classmethod
    def validate_jwt_expire_hours(cls, v: int) -> int:
        if v < 1 or v > 168:
            raise ValueError("JWT_EXPIRE_HOURS must be between 1 and 168 (1 hour to 7 days)")
        return v

    @field_validator("ADMIN_USERNAME", "ADMIN_EMAIL")
    @classmethod
    def validate_admin_identity(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("ADMIN_USERNAME and ADMIN_EMAIL must be non-empty")
        return v.strip()

    @property
    def database_url(self) -> str:
        """Return DATABASE_URL if given, else a psycopg2 URL built from the DB_* parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD.get_secret_value()}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?sslmode={self.DB_SSL_MODE}"
        )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


def resolve_jwt_secret(settings: Settings) -> str:
    """
    Return the token signing secret.

    Without JWT_SECRET, production refuses to start (RuntimeError) and
    development falls back to a fixed secret with a loud warning.
    """
    if settings.JWT_SECRET is not None:
        return settings.JWT_SECRET.get_secret_value()
    if settings.is_production:
        raise RuntimeError("JWT_SECRET must be set when APP_ENV=production.")
    logger.warning(
        "JWT_SECRET is not set; using the built-in development secret. "
        "Tokens signed with it are forgeable. Set JWT_SECRET in .env."
    )
    return DEV_FALLBACK_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
