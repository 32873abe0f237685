"""
TripNest Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the CLI entry point, and MongoStore.
When:  Loaded once at module import time; credentials are validated before
       the server starts.

Environment variables:
    DB_USER / DB_PASSWORD   Store credentials (required)
    DB_HOST                 Atlas cluster host
    DB_NAME / DB_COLLECTION Database and collection holding tourist spots
    PORT / HOST             Listening address (PORT defaults to 5000)
    CORS_ORIGINS            Comma-separated origins, "*" for any
    LOG_LEVEL               DEBUG, INFO, WARNING, ERROR, CRITICAL
"""

from typing import List
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from tripnest.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Credentials default to empty strings so the module can be imported
    (tests, tooling) without them; `validate_required()` is the gate
    that keeps the server from starting without them.
    """

    # ── Document Store ────────────────────────────────────────────────────
    db_user: str = Field(default="", description="MongoDB Atlas username")
    db_password: str = Field(default="", description="MongoDB Atlas password")

    # What: SRV host of the Atlas cluster; the driver resolves the members via DNS
    db_host: str = Field(default="cluster0.j8jy5.mongodb.net")
    db_app_name: str = Field(default="Cluster0")

    db_name: str = Field(default="tripNestData")
    db_collection: str = Field(default="tourist_spot_data")

    @property
    def mongo_uri(self) -> str:
        """
        What: Builds the mongodb+srv connection string.
        How:  Credentials are percent-escaped (RFC 3986) so passwords containing
              '@', ':' or '/' do not break the URI.
        """
        return (
            f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_password)}"
            f"@{self.db_host}/?retryWrites=true&w=majority&appName={self.db_app_name}"
        )

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

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
        "case_sensitive": False,  # DB_USER and db_user both work
        "extra": "ignore",
    }

    def validate_required(self) -> None:
        """
        What:  Validates that the store credentials are configured.
        When:  Called by the CLI before uvicorn starts and again in the lifespan.
        Raises:
            ConfigurationError listing every missing variable.
        """
        missing = []
        if not self.db_user:
            missing.append("DB_USER")
        if not self.db_password:
            missing.append("DB_PASSWORD")
        if missing:
            raise ConfigurationError(
                "Database credentials are not set in the environment variables: "
                + ", ".join(missing),
                context={"missing": missing},
            )


# Singleton instance — imported throughout the application
settings = Settings()
