"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["dev", "staging", "prod"] = "dev"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8000

    # Security
    internal_api_token: str = Field(
        ...,
        description="Shared secret required in the X-Internal-Token header",
    )

    # Gemini API
    gemini_api_key: str = Field(..., description="Google Gemini API key")
    gemini_model_text: str = "gemini-2.5-flash"
    gemini_timeout_seconds: int = 300
    gemini_max_retries: int = 3

    # Report generation
    default_report_format: Literal["json", "markdown"] = Field(
        default="json",
        description="Response contract requested from the model when none is given",
    )
    max_upload_size_mb: int = 50

    # Company branding used for PDF export
    company_name: str = "Lake City Restoration"
    company_address: str = "306 Argonne Rd, Warsaw, IN 46580"
    company_phone: str = "(574) 385-9111"
    company_email: str = "911@lcrestore.com"
    company_website: str = "https://www.lcrestore.com"
    company_certifications: list[str] = Field(
        default_factory=lambda: ["IICRC Certified Firm"],
    )

    # Redis
    redis_url: str | None = Field(
        default=None,
        description="Redis connection URL (optional - caching disabled if not set)",
    )
    redis_cache_ttl_seconds: int = 3600

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @property
    def max_upload_size_bytes(self) -> int:
        """Maximum upload size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
