"""Token-related exceptions module.

Every failure of the token service surfaces as one of these classes. Callers
branch on the class or on ``kind``; messages are fixed and generic so they
can be returned to clients without leaking why a token was refused.
"""

from typing import Optional

from storyswap.models.enums import TokenClass, TokenErrorKind
from .base_exceptions import BaseError

class TokenError(BaseError):
    """Base class for token-related exceptions."""

    kind: TokenErrorKind
    default_message: str = "Token error"
    status_code = 401

    def __init__(
        self,
        message: Optional[str] = None,
        token_class: Optional[TokenClass] = None
    ):
        super().__init__(
            message=message or self.default_message,
            error_code=self.kind.value
        )
        self.token_class = token_class

class TokenGenerationError(TokenError):
    """Raised when a token cannot be built or signed."""
    kind = TokenErrorKind.GENERATION_FAILED
    default_message = "Failed to generate token"
    status_code = 500

class TokenExpiredError(TokenError):
    """Base class for tokens rejected because their lifetime elapsed."""

class AccessTokenExpiredError(TokenExpiredError):
    """Raised when an access token has expired."""
    kind = TokenErrorKind.ACCESS_TOKEN_EXPIRED
    default_message = "Access token expired"

class RefreshTokenExpiredError(TokenExpiredError):
    """Raised when a refresh token has expired."""
    kind = TokenErrorKind.REFRESH_TOKEN_EXPIRED
    default_message = "Refresh token expired"

class InvalidTokenError(TokenError):
    """Base class for tokens with bad signatures or structure."""

class InvalidAccessTokenError(InvalidTokenError):
    """Raised when an access token is malformed or badly signed."""
    kind = TokenErrorKind.INVALID_ACCESS_TOKEN
    default_message = "Invalid access token"

class InvalidRefreshTokenError(InvalidTokenError):
    """Raised when a refresh token is malformed or badly signed."""
    kind = TokenErrorKind.INVALID_REFRESH_TOKEN
    default_message = "Invalid refresh token"

class AccessTokenNotActiveError(TokenError):
    """Raised when an access token's not-before time is still in the future."""
    kind = TokenErrorKind.ACCESS_TOKEN_NOT_ACTIVE
    default_message = "Access token not active yet"

class InvalidTokenTypeError(TokenError):
    """Raised when a well-signed token carries the wrong token class."""
    kind = TokenErrorKind.INVALID_TOKEN_TYPE
    default_message = "Invalid token type"

class InvalidVerificationTokenError(TokenError):
    """Raised for any email verification token failure."""
    kind = TokenErrorKind.INVALID_VERIFICATION_TOKEN
    default_message = "Invalid verification token"
    status_code = 400

class InvalidResetTokenError(TokenError):
    """Raised for any password reset token failure."""
    kind = TokenErrorKind.INVALID_RESET_TOKEN
    default_message = "Invalid reset token"
    status_code = 400

class TokenVerificationFailedError(TokenError):
    """Raised when verification fails for an unexpected reason."""
    kind = TokenErrorKind.VERIFICATION_FAILED
    default_message = "Token verification failed"
    status_code = 500

__all__ = [
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
