"""
Configuration management for the validation API.

Uses Pydantic Settings for type-safe configuration with .env file support.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Custom Validation Rules API"

    # Environment
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"

    # Service Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: str = "http://localhost:3000"

    # Swagger/OpenAPI UI; defaults to on outside production
    enable_docs: bool | None = None

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def docs_enabled(self) -> bool:
        if self.enable_docs is None:
            return not self.is_production
        return self.enable_docs

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse allowed origins as list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
