"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="wizspeek-profiles", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5000",
        description="Comma-separated list of allowed CORS origins",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")

    # Auth
    jwt_signing_key: str = Field(
        ...,
        description="Key used to verify access tokens: a JWK (JSON string) or a shared secret for HS* algorithms",
    )
    jwt_algorithm: str = Field(default="ES256", description="Algorithm access tokens are signed with")

    # Contact invitations
    invitation_base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL used to build invitation join links",
    )
    invitation_expire_days: int = Field(default=7, description="Days until a new invitation expires")

    # Request logging
    slow_request_threshold_ms: float = Field(default=1000, description="Log requests slower than this as warnings")
    very_slow_request_threshold_ms: float = Field(default=3000, description="Log requests slower than this as errors")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def uses_shared_secret(self) -> bool:
        """Check if tokens are verified with a shared secret instead of a JWK."""
        return self.jwt_algorithm.upper().startswith("HS")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
