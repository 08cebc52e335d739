"""Application settings module.

This module provides centralized configuration management for the Story Swap
token service. All settings can be overridden using environment variables.

Environment Variable Precedence:
1. OS Environment Variables (Highest Priority)
   - Set via export/set commands
   - Set in deployment environment
   - Example: export JWT_SECRET="..."

2. Environment-Specific .env Files
   - .env.production (Production environment)
   - .env.test (Testing environment)
   - .env.development (Development environment)

3. Default .env File
   - .env file in project root

4. Settings Class Defaults (Lowest Priority)

Usage:
    from storyswap.config import get_settings

    settings = get_settings()
    token_settings = TokenSettings.from_settings(settings)

Security Note:
    JWT_SECRET and REFRESH_TOKEN_SECRET have no defaults. A process started
    without them fails while loading settings instead of issuing tokens that
    can never be verified.

Duration values (JWT_EXPIRES_IN, REFRESH_TOKEN_EXPIRES_IN) accept seconds or
strings such as "15m", "24h" and "30d".
"""

import os
import logging
from datetime import timedelta
from pathlib import Path
from typing import List, Union

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storyswap.constants import (
    API_PREFIX,
    DEFAULT_ACCESS_TOKEN_TTL,
    DEFAULT_JWT_ALGORITHM,
    DEFAULT_REFRESH_TOKEN_TTL,
    SUPPORTED_JWT_ALGORITHMS,
)
from storyswap.utils.durations import parse_duration

# Get the base directory
_BASE_DIR = Path(__file__).resolve().parent.parent.parent

_ENVIRONMENT = os.environ.get("APP_ENVIRONMENT", "development")


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables and .env files.
    """

    # Application settings
    APP_NAME: str = Field(default="Story Swap", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_ENVIRONMENT: str = Field(default="development", description="Application environment")
    API_PREFIX: str = Field(default=API_PREFIX, description="Versioned API prefix")

    # Token secrets
    JWT_SECRET: SecretStr = Field(description="HMAC key for access, verification and reset tokens")
    REFRESH_TOKEN_SECRET: SecretStr = Field(description="HMAC key for refresh tokens")
    JWT_ALGORITHM: str = Field(default=DEFAULT_JWT_ALGORITHM, description="JWT signing algorithm")

    # Token expiration times
    JWT_EXPIRES_IN: timedelta = Field(default=DEFAULT_ACCESS_TOKEN_TTL, description="Access token lifetime")
    REFRESH_TOKEN_EXPIRES_IN: timedelta = Field(default=DEFAULT_REFRESH_TOKEN_TTL, description="Refresh token lifetime")

    # Logging settings
    LOG_LEVEL: Union[str, int] = Field(default=logging.INFO, description="Logging level")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )

    # Authentication middleware
    AUTH_EXCLUDE_PATHS: List[str] = Field(
        default=["/docs", "/redoc", "/openapi.json", "/health"],
        description="Path prefixes that skip authentication"
    )

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=(
            os.path.join(_BASE_DIR, ".env"),
            os.path.join(_BASE_DIR, f".env.{_ENVIRONMENT}"),
        ),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("JWT_EXPIRES_IN", "REFRESH_TOKEN_EXPIRES_IN", mode="before")
    @classmethod
    def parse_token_lifetime(cls, v):
        """Accept seconds or unit-suffixed strings for token lifetimes."""
        return parse_duration(v)

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Only HMAC algorithms are supported."""
        algorithm = v.upper()
        if algorithm not in SUPPORTED_JWT_ALGORITHMS:
            raise ValueError(
                f"Unsupported JWT algorithm {v!r}; expected one of {sorted(SUPPORTED_JWT_ALGORITHMS)}"
            )
        return algorithm

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str) and not v.isdigit():
            return v.upper()
        return int(v) if isinstance(v, str) else v
