# backend/app/core/config.py
"""
Production-ready configuration using pydantic-settings.

Security considerations:
- No hardcoded secrets in production (SECRET_KEY must be set via env)
- CORS_ORIGINS parsed from comma-separated env var, never defaults to "*"
- Database URLs normalized for async drivers automatically
- Seed endpoints are disabled unless ADMIN_SEED_SECRET is set
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Strictly typed application settings.

    Priority for loading:
    1. Environment variables (highest priority)
    2. .env file (via pydantic-settings)
    3. Default values (lowest priority, dev-safe only)
    """

    # ─────────────────────────────────────────────────────────────
    # Application metadata
    # ─────────────────────────────────────────────────────────────
    PROJECT_NAME: str = "Hala Baghdad"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # ─────────────────────────────────────────────────────────────
    # Environment mode
    # "production" turns on Secure cookies
    # ─────────────────────────────────────────────────────────────
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ─────────────────────────────────────────────────────────────
    # Security: JWT Configuration
    # SECRET_KEY MUST be set in production via environment variable
    # ─────────────────────────────────────────────────────────────
    SECRET_KEY: str = "INSECURE_DEV_KEY_CHANGE_IN_PRODUCTION"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # ─────────────────────────────────────────────────────────────
    # Password hashing
    # ─────────────────────────────────────────────────────────────
    BCRYPT_ROUNDS: int = 12

    # ─────────────────────────────────────────────────────────────
    # Login throttling and account lockout
    # LOGIN_MAX_LOCKOUT_SECONDS caps the exponential backoff
    # ─────────────────────────────────────────────────────────────
    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_WINDOW_SECONDS: int = 15 * 60
    LOGIN_MAX_LOCKOUT_SECONDS: int = 24 * 60 * 60
    ACCOUNT_LOCKOUT_MINUTES: int = 15
    LOGIN_FAILURE_DELAY_MIN_MS: int = 500
    LOGIN_FAILURE_DELAY_MAX_MS: int = 1000

    # ─────────────────────────────────────────────────────────────
    # Public endpoint rate limits (per client IP, fixed window)
    # ─────────────────────────────────────────────────────────────
    VOTE_RATE_LIMIT: int = 10
    VOTE_RATE_WINDOW_SECONDS: int = 60
    REGISTER_RATE_LIMIT: int = 5
    REGISTER_RATE_WINDOW_SECONDS: int = 60
    RATE_LIMIT_SWEEP_SECONDS: int = 60

    # Namespaces the vote ledger hashes from other uses of a fingerprint
    VOTE_CONTEST_SALT: str = "hala-baghdad-vote"

    # Shared secret for the seed endpoints (disabled when empty)
    ADMIN_SEED_SECRET: Optional[str] = None

    # ─────────────────────────────────────────────────────────────
    # Database Configuration
    # Priority: DATABASE_URL env var → SQLite fallback for local dev
    #
    # Hosted Postgres usually hands out postgres:// URLs.
    # We normalize to postgresql+asyncpg:// for SQLAlchemy async.
    # ─────────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./hala.db"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """
        Normalize database URLs for async SQLAlchemy compatibility.

        Conversions:
        - postgres://     → postgresql+asyncpg://
        - postgresql://   → postgresql+asyncpg://
        - sqlite:///      → sqlite+aiosqlite:///
        """
        if v is None:
            return "sqlite+aiosqlite:///./hala.db"

        url = v.strip()

        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)

        if url.startswith("postgresql://") and "+asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)

        if url.startswith("sqlite:///") and "+aiosqlite" not in url:
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)

        return url

    # MUST be False in production to prevent SQL query exposure
    DATABASE_ECHO: bool = False

    # ─────────────────────────────────────────────────────────────
    # Reverse proxy
    # Only these peers may rewrite the client address via
    # X-Forwarded-For; the vote and login limits key on that address
    # ─────────────────────────────────────────────────────────────
    FORWARDED_ALLOW_IPS: str = "127.0.0.1"

    # ─────────────────────────────────────────────────────────────
    # CORS Configuration
    # Parsed from comma-separated CORS_ORIGINS env var
    # Empty string → empty list (NOT "*" for security)
    # ─────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def BACKEND_CORS_ORIGINS(self) -> List[str]:
        """
        Parse CORS_ORIGINS string into a list of allowed origins.

        Returns:
            List of allowed origin URLs
        """
        if not self.CORS_ORIGINS or not self.CORS_ORIGINS.strip():
            return []

        return [
            origin.strip()
            for origin in self.CORS_ORIGINS.split(",")
            if origin.strip()
        ]

    @property
    def REFRESH_COOKIE_PATH(self) -> str:
        """The refresh cookie is only ever sent to the refresh endpoint."""
        return f"{self.API_V1_STR}/auth/refresh"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # Extra fields in .env are ignored (prevents config injection)
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database (local development)."""
        return "sqlite" in self.DATABASE_URL.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance.

    Using lru_cache ensures settings are only loaded once,
    providing consistent configuration across the application.
    """
    return Settings()


# Existing code imports `settings` directly from this module
settings = get_settings()
