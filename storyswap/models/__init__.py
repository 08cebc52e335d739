"""Models package.

This module exports the enums and Pydantic models of the token service.
"""

# Enums
from .enums import TokenClass, SecretKeyspace, TokenErrorKind

# Token models
from .token_models import UserProfile, TokenClaims, TokenPair

__all__ = [
    'TokenClass',
    'SecretKeyspace',
    'TokenErrorKind',
    'UserProfile',
    'TokenClaims',
    'TokenPair'
]
