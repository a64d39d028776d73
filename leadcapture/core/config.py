# leadcapture/core/config.py
from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # Server
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field(default="json", validation_alias="LOG_FORMAT")

    # CORS
    allowed_origins: str = Field(default="*", validation_alias="ALLOWED_ORIGINS")

    # Only enable behind a reverse proxy that overwrites X-Forwarded-For
    trust_forwarded_for: bool = Field(default=False, validation_alias="TRUST_FORWARDED_FOR")

    # Monitoring
    sentry_dsn: Optional[str] = Field(default=None, validation_alias="SENTRY_DSN")

    # IP lookup
    ip_lookup_url: str = Field(
        default="https://api.ipify.org?format=json",
        validation_alias="IP_LOOKUP_URL",
    )

    # Email verification
    email_validation_url: str = Field(
        default="https://validate-email-endpoint.vercel.app/api/validate-email",
        validation_alias="EMAIL_VALIDATION_URL",
    )
    email_validation_timeout_ms: int = Field(default=2000, validation_alias="EMAIL_VALIDATION_TIMEOUT_MS")

    # HubSpot lead capture
    hubspot_submit_url: str = Field(
        default="https://api.hsforms.com/submissions/v3/integration/submit",
        validation_alias="HUBSPOT_SUBMIT_URL",
    )
    hubspot_portal_id: str = Field(default="39674306", validation_alias="HUBSPOT_PORTAL_ID")
    hubspot_form_id: str = Field(
        default="12cc5240-d11a-49aa-b4d9-0f63b72eced5",
        validation_alias="HUBSPOT_FORM_ID",
    )
    # None means the submission call is not time-bounded
    submission_timeout_seconds: Optional[float] = Field(default=None, validation_alias="SUBMISSION_TIMEOUT_SECONDS")

    # Persisted visitor state
    visitor_cookie_name: str = Field(default="hubspotutk", validation_alias="VISITOR_COOKIE_NAME")
    attribution_storage_key: str = Field(default="dlmc", validation_alias="ATTRIBUTION_STORAGE_KEY")

    # Conversion page
    redirect_path: str = Field(default="/demo-form", validation_alias="REDIRECT_PATH")

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

    @field_validator("log_format")
    def validate_log_format(cls, v):
        valid_formats = ["json", "console"]
        if v not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return v

    @field_validator("email_validation_timeout_ms")
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("email_validation_timeout_ms must be positive")
        return v

    @field_validator("redirect_path")
    def validate_redirect_path(cls, v):
        if not v.startswith("/"):
            raise ValueError("redirect_path must start with '/'")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @property
    def hubspot_form_url(self) -> str:
        base = self.hubspot_submit_url.rstrip("/")
        return f"{base}/{self.hubspot_portal_id}/{self.hubspot_form_id}"

    def origins(self) -> List[str]:
        if self.allowed_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()
