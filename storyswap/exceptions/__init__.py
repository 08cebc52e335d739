"""Core exceptions initialization."""

# Import base exceptions first since they're used by other modules
from .base_exceptions import (
    BaseError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError
)

from .token_exceptions import (
    TokenError,
    TokenGenerationError,
    TokenExpiredError,
    AccessTokenExpiredError,
    RefreshTokenExpiredError,
    InvalidTokenError,
    InvalidAccessTokenError,
    InvalidRefreshTokenError,
    AccessTokenNotActiveError,
    InvalidTokenTypeError,
    InvalidVerificationTokenError,
    InvalidResetTokenError,
    TokenVerificationFailedError
)

__all__ = [
    # Base exceptions
    'BaseError',
    'AuthenticationError',
    'AuthorizationError',
    'ConfigurationError',

    # Token exceptions
    'TokenError',
    'TokenGenerationError',
    'TokenExpiredError',
    'AccessTokenExpiredError',
    'RefreshTokenExpiredError',
    'InvalidTokenError',
    'InvalidAccessTokenError',
    'InvalidRefreshTokenError',
    'AccessTokenNotActiveError',
    'InvalidTokenTypeError',
    'InvalidVerificationTokenError',
    'InvalidResetTokenError',
    'TokenVerificationFailedError'
]
