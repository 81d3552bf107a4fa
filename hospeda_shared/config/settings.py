"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    # Database
    # SQLite keeps local development dependency-free; production points at PostgreSQL
    database_url: str = "sqlite:///./hospeda.db"
    database_echo: bool = False

    # Server
    api_port: int = 8000
    api_title: str = "Hospeda API"

    # Comma-separated list of allowed origins (empty uses default localhost list)
    allowed_origins: str = ""

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = ""  # Empty = DEBUG when debug is on, INFO otherwise

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def validate_production_settings(self) -> list[str]:
        """
        Validate that the configuration is safe to run in production.
        Returns a list of validation errors. Empty list means all checks pass.
        """
        errors = []

        if self.environment == "production":
            if self.debug:
                errors.append("DEBUG must be False in production")

            if self.is_sqlite:
                errors.append(
                    "DATABASE_URL must point at a server database in production, not SQLite"
                )

            if not self.allowed_origins:
                errors.append(
                    "ALLOWED_ORIGINS must be set in production (comma-separated list of allowed domains)"
                )

        if self.default_page_size > self.max_page_size:
            errors.append("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE")

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()

# Direct access to commonly used settings
DATABASE_URL = settings.database_url
