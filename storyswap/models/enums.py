"""Enums module for models.

This module contains the enum classes shared by models, services and
exceptions to avoid circular imports.
"""

from enum import Enum

class TokenClass(str, Enum):
    """Purpose tag carried in the ``type`` claim of every token."""
    ACCESS = "access"
    REFRESH = "refresh"
    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"

class SecretKeyspace(str, Enum):
    """Which configured secret signs a token class."""
    ACCESS = "access"
    REFRESH = "refresh"

class TokenErrorKind(str, Enum):
    """Token error kind enumeration."""
    GENERATION_FAILED = "token_generation_failed"
    ACCESS_TOKEN_EXPIRED = "access_token_expired"
    REFRESH_TOKEN_EXPIRED = "refresh_token_expired"
    INVALID_ACCESS_TOKEN = "invalid_access_token"
    INVALID_REFRESH_TOKEN = "invalid_refresh_token"
    ACCESS_TOKEN_NOT_ACTIVE = "access_token_not_active"
    INVALID_TOKEN_TYPE = "invalid_token_type"
    INVALID_VERIFICATION_TOKEN = "invalid_verification_token"
    INVALID_RESET_TOKEN = "invalid_reset_token"
    VERIFICATION_FAILED = "token_verification_failed"
