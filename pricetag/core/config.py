"""Application configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults for development. The settings object is frozen so
it can be handed to services as an immutable configuration struct.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ========== Product Feed ==========
    feed_path: Path = Field(
        default=Path("product_feed.xml"),
        description="Path to the Atom product feed",
    )
    feed_namespace: str = Field(
        default="http://base.google.com/ns/1.0",
        description="Vendor namespace carrying the product id and price fields",
    )

    # ========== Rendering ==========
    font_path: Path | None = Field(
        default=Path("fonts/Kanit.ttf"),
        description="TrueType font used for the price label; unset uses Pillow's default font",
    )
    max_width: int = Field(default=2000, ge=1)
    max_height: int = Field(default=1000, ge=1)
    fallback_width: int = Field(default=1000, ge=1)
    fallback_height: int = Field(default=1415, ge=1)

    # ========== Image Cache ==========
    cache_dir: Path = Field(default=Path("cache"), description="Directory for rendered tags")
    cache_expiration_seconds: int = Field(default=7 * 24 * 60 * 60, ge=1)
    cache_key_includes_size: bool = Field(
        default=True,
        description="Include width and height in the cache key",
    )

    # ========== HTTP ==========
    legacy_error_status: bool = Field(
        default=False,
        description="Answer validation and lookup errors with HTTP 200",
    )
    cors_origins_str: str = Field(
        default="*",
        alias="CORS_ORIGINS",
        description="Comma-separated CORS origins",
    )

    # ========== Application ==========
    app_name: str = "Price Tag Service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ========== Computed Properties ==========
    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
