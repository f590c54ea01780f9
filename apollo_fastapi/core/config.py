"""
Configuration Management

Centralized configuration using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from ``APOLLO_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APOLLO_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Apollo FastAPI"
    app_version: str = "0.1.0"
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")

    # Endpoints
    graphql_path: str = Field(default="/graphql")
    graphiql_enabled: bool = Field(default=True)
    graphiql_path: str = Field(default="/graphiql")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
