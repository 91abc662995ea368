"""Application configuration."""
import json
import os
from typing import Any, Dict, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Spreadsheet
    SPREADSHEET_ID: Optional[str] = None
    SHEET_NAME: str = "Guests"
    SHEET_RANGE: str = "A:Z"

    # Google service account - either the email/key pair or the full JSON key
    GOOGLE_CLIENT_EMAIL: Optional[str] = None
    GOOGLE_PRIVATE_KEY: Optional[str] = None
    GOOGLE_SERVICE_ACCOUNT_JSON: Optional[str] = None

    @field_validator('GOOGLE_PRIVATE_KEY', mode='before')
    @classmethod
    def unescape_private_key(cls, v):
        """Turn literal \\n sequences from .env files into real newlines."""
        if isinstance(v, str):
            return v.replace("\\n", "\n")
        return v

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5001

    # CORS - Can be a list or comma-separated string
    CORS_ORIGINS: Union[list, str] = ["*"]

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    # Application
    APP_TITLE: str = "Guest List Check-in"
    APP_DESCRIPTION: str = "Event check-in backed by a Google Sheets guest list"
    APP_VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Hold a per-identifier lock across read/decide/write (single process only)
    SERIALIZE_CHECKINS: bool = True

    # Rate limit storage; falls back to in-memory counters
    REDIS_URL: Optional[str] = None

    def has_credentials(self) -> bool:
        if self.GOOGLE_SERVICE_ACCOUNT_JSON:
            return True
        return bool(self.GOOGLE_CLIENT_EMAIL and self.GOOGLE_PRIVATE_KEY)

    def get_service_account_info(self) -> Dict[str, Any]:
        """
        Build the service account info dict for google-auth.

        Priority: GOOGLE_SERVICE_ACCOUNT_JSON > GOOGLE_CLIENT_EMAIL/GOOGLE_PRIVATE_KEY

        Raises:
            ValueError: If no usable credentials are configured
        """
        if self.GOOGLE_SERVICE_ACCOUNT_JSON:
            try:
                return json.loads(self.GOOGLE_SERVICE_ACCOUNT_JSON)
            except json.JSONDecodeError as exc:
                raise ValueError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON") from exc

        if self.GOOGLE_CLIENT_EMAIL and self.GOOGLE_PRIVATE_KEY:
            return {
                "type": "service_account",
                "client_email": self.GOOGLE_CLIENT_EMAIL,
                "private_key": self.GOOGLE_PRIVATE_KEY,
                "token_uri": "https://oauth2.googleapis.com/token",
            }

        raise ValueError(
            "Google credentials missing. Provide either GOOGLE_SERVICE_ACCOUNT_JSON or "
            "both GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY"
        )

    def validate_production_config(self) -> None:
        """Validate that production-critical settings are properly configured."""
        if self.ENVIRONMENT == "production":
            issues = []

            if not self.SPREADSHEET_ID:
                issues.append("SPREADSHEET_ID must be set")

            if not self.has_credentials():
                issues.append(
                    "Google credentials must be set (GOOGLE_SERVICE_ACCOUNT_JSON or "
                    "GOOGLE_CLIENT_EMAIL + GOOGLE_PRIVATE_KEY)"
                )

            if self.CORS_ORIGINS == ["*"]:
                issues.append("CORS_ORIGINS should be restricted to specific domains")

            if issues:
                raise ValueError(
                    "Production configuration errors:\n" +
                    "\n".join(f"  - {issue}" for issue in issues)
                )


settings = Settings()

# Validate production configuration on startup
if os.getenv("ENVIRONMENT") == "production":
    settings.validate_production_config()
