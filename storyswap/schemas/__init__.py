"""Request and response schemas."""

from .auth import TokenRequest, VerifiedTokenResponse, SessionResponse, TokenStatusResponse

__all__ = [
    'TokenRequest',
    'VerifiedTokenResponse',
    'SessionResponse',
    'TokenStatusResponse'
]
