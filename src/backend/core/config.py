"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "CoopVote"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    COLLATION_LOCALE: str = ""  # LC_COLLATE for name ordering, e.g. "ko_KR.UTF-8"; empty keeps the process locale

    # Supabase (auth, tables, storage, RPC)
    SUPABASE_URL: str = ""  # Required - loaded from environment
    SUPABASE_ANON_KEY: str = ""  # Required - loaded from environment

    @field_validator("SUPABASE_URL", "SUPABASE_ANON_KEY")
    @classmethod
    def validate_required_secrets(cls, v: str, info: Any) -> str:
        """Validate that required connection settings are set."""
        if not v:
            raise ValueError(f"{info.field_name} must be set in environment")
        return v

    # Storage buckets
    # Bucket names must match the buckets created in the Supabase dashboard
    CANDIDATE_PHOTO_BUCKET: str = "candidates"  # Public bucket
    CANDIDATE_PROOF_BUCKET: str = "candidate_proofs"  # Private bucket, signed URLs only
    PHOTO_CACHE_CONTROL_SECONDS: int = 3600
    PROOF_SIGNED_URL_EXPIRES_SECONDS: int = 600

    # Administration
    ADMIN_CHECK_RPC: str = "is_admin"  # Remote function returning true for election admins
    ACTION_LOG_LIMIT: int = 50  # Entries shown in the admin audit tail

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        import json

        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Whether human-readable log output should be used."""
        return self.DEBUG or self.APP_ENV in ("development", "test")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
