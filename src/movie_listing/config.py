"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Movie Listing API"
    debug: bool = False
    environment: Literal["development", "production"] = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str = "sqlite+aiosqlite:///./movies.db"
    seed_database: bool = True

    # Title search: when False, % and _ in a search term act as LIKE wildcards
    search_escape_wildcards: bool = False

    # Frontend
    static_dir: str = "dist"
    cors_origins: list[str] = ["http://localhost:5173"]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level

    @property
    def is_production(self) -> bool:
        """Whether the precompiled frontend should be served directly."""
        return self.environment == "production"

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if self.is_production:
            if not (Path(self.static_dir) / "index.html").is_file():
                warnings.append(
                    f"STATIC_DIR '{self.static_dir}' has no index.html - "
                    "the frontend will not be served"
                )
            if self.debug:
                warnings.append("DEBUG mode is enabled - should be disabled in production")

        if not self.search_escape_wildcards:
            warnings.append(
                "SEARCH_ESCAPE_WILDCARDS is off - '%' and '_' in search terms match as wildcards"
            )

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
