"""Application configuration using Pydantic Settings."""

from functools import lru_cache

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
    app_name: str = Field(default="SurfAI Profiles API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Durable store
    database_url: str = Field(
        default="",
        description=(
            "PostgreSQL (Supabase) connection URL. Leave empty to run on the "
            "in-memory fallback store only."
        ),
    )
    database_echo: bool = Field(default=False)
    durable_store_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Per-call timeout applied by the durable store adapter",
    )

    # Profile cache
    profile_cache_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="How long a cached profile snapshot stays authoritative",
    )

    # Recommendations
    recommendation_limit: int = Field(default=3, ge=1)
    recommendation_alternatives: int = Field(default=3, ge=0)

    # Logging
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)

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
    def durable_store_enabled(self) -> bool:
        """Whether a durable store is configured at all."""
        return bool(self.database_url.strip())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Supabase and most hosting providers hand out ``postgresql://`` URLs;
        SQLAlchemy's async engine needs ``postgresql+asyncpg://``.
        """
        url = self.database_url.strip()
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

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
