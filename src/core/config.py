"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Vet Registry API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Storage
    storage_backend: Literal["database", "memory"] = Field(
        default="database",
        description="Where the profile slots live: SQL database or process memory",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vet_registry.db",
        description="SQLAlchemy async connection URL for the key-value slot table",
    )
    vet_profiles_key: str = Field(
        default="vetProfiles",
        description="Storage slot holding the full vet/clinic profile collection",
    )
    user_profile_key: str = Field(
        default="userProfile",
        description="Storage slot holding the owner's user profile",
    )
    duplicate_cleanup_on_load: bool = Field(
        default=True,
        description="Collapse exact duplicates when the collection is first loaded",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure a PostgreSQL URL uses the asyncpg driver scheme.

        Supabase and most hosting providers supply a plain ``postgresql://``
        URL. SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
