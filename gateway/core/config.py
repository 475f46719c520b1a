# gateway/core/config.py
from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Environment
    environment: str = Field(default="production", validation_alias="ENVIRONMENT")

    # Server
    api_host: str = Field(default="0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="API_PORT")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS / origin policy
    allowed_origin: str = Field(default="", validation_alias="ALLOWED_ORIGIN")

    # Airtable
    airtable_base_id: Optional[str] = Field(default=None, validation_alias="AIRTABLE_BASE_ID")
    airtable_table_id: Optional[str] = Field(default=None, validation_alias="AIRTABLE_TABLE_ID")
    airtable_token: Optional[str] = Field(default=None, validation_alias="AIRTABLE_TOKEN")
    airtable_api_url: str = Field(default="https://api.airtable.com/v0", validation_alias="AIRTABLE_API_URL")

    # Admin
    admin_password: Optional[str] = Field(default=None, validation_alias="ADMIN_PASSWORD")

    # Rate Limiting
    rate_limit_max_requests: int = Field(default=10, validation_alias="RATE_LIMIT_MAX_REQUESTS")
    rate_limit_window_seconds: int = Field(default=3600, validation_alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_redis_url: Optional[str] = Field(default=None, validation_alias="RATE_LIMIT_REDIS_URL")
    client_ip_header: str = Field(default="CF-Connecting-IP", validation_alias="CLIENT_IP_HEADER")

    # Monitoring
    sentry_dsn: Optional[str] = Field(default=None, validation_alias="SENTRY_DSN")

    @field_validator("environment")
    def validate_environment(cls, v):
        valid_envs = ["development", "testing", "staging", "production"]
        if v not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("rate_limit_max_requests", "rate_limit_window_seconds")
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("rate limit settings must be positive")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def expose_error_details(self) -> bool:
        """Upstream error text is only returned to callers outside production."""
        return not self.is_production

    @property
    def airtable_configured(self) -> bool:
        return bool(self.airtable_base_id and self.airtable_table_id and self.airtable_token)

    def origins(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origin.split(",") if origin.strip()]


def get_settings() -> Settings:
    return Settings()
