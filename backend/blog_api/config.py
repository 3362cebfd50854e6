"""
Blog API — Application Configuration
=====================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, model_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development against a
    MongoDB instance on localhost. Attributes are grouped by concern.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host[:port][/?options]
    mongo_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )
    mongo_database: str = Field(default="blog")
    mongo_collection: str = Field(default="posts")

    # Pool bounds for the single process-wide client
    mongo_max_pool_size: int = Field(default=20, ge=1, le=500)
    mongo_min_pool_size: int = Field(default=0, ge=0, le=100)

    @model_validator(mode="after")
    def validate_pool_bounds(self) -> "Settings":
        """Minimum pool size must not exceed the maximum."""
        if self.mongo_min_pool_size > self.mongo_max_pool_size:
            raise ValueError(
                f"mongo_min_pool_size ({self.mongo_min_pool_size}) must not exceed "
                f"mongo_max_pool_size ({self.mongo_max_pool_size})"
            )
        return self

    # Deadlines so an unreachable database fails the request instead of hanging it
    mongo_server_selection_timeout_ms: int = Field(default=5_000, ge=100, le=60_000)
    mongo_timeout_ms: int = Field(default=10_000, ge=100, le=120_000)

    # ── Startup Connection Retry ──────────────────────────────────────────
    # Tenacity settings for the initial ping in the lifespan handler
    connect_retry_attempts: int = Field(default=3, ge=1, le=10)
    connect_retry_min_wait: int = Field(default=1, ge=1, le=30)
    connect_retry_max_wait: int = Field(default=10, ge=1, le=120)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
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
        "case_sensitive": False,  # MONGO_URL and mongo_url both work
    }


# Singleton instance — imported throughout the application
settings = Settings()
