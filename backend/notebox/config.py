"""
Notebox Backend - Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the bootstrapper, the app factory and the server entry point.
When:  Loaded once at module import time; validated before the app starts.

Database location can be given either as a single DATABASE_URL or as the
discrete DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME parameters.
DATABASE_URL wins when both are present.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url

# Driver used for every PostgreSQL URL, whatever scheme the operator supplied
ASYNC_POSTGRES_DRIVER = "postgresql+asyncpg"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults matching the docker-compose
    database container (demo_user / demo_notes).
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Full URL, e.g. postgresql://user:pass@db:5432/notes
    database_url: Optional[str] = Field(
        default=None,
        description="Database connection URL; overrides the discrete DB_* values",
    )
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="demo_user")
    db_password: str = Field(default="demo_password")
    db_name: str = Field(default="demo_notes")

    # Pool sizing (ignored for SQLite)
    db_pool_size: int = Field(default=20, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Statement logging through the `sqlalchemy.engine` logger
    db_log_statements: bool = Field(default=True)

    # ── Startup Connection Retry ──────────────────────────────────────────
    # Fixed delay between attempts; the process exits once attempts run out
    db_connect_max_attempts: int = Field(default=10, ge=1, le=100)
    db_connect_retry_delay: float = Field(default=5.0, ge=0, le=300)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows every origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> URL:
        """
        What:  The async SQLAlchemy URL the engine connects to.
        How:   Parses DATABASE_URL when set, otherwise assembles one from the
               discrete DB_* parameters. Plain `postgres://` and
               `postgresql://` schemes are switched to the asyncpg driver.
        """
        if self.database_url:
            url = make_url(self.database_url)
            if url.drivername in ("postgres", "postgresql"):
                url = url.set(drivername=ASYNC_POSTGRES_DRIVER)
            return url

        return URL.create(
            ASYNC_POSTGRES_DRIVER,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


# Singleton instance, imported throughout the application
settings = Settings()
