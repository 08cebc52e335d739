"""Services initialization."""

from .token_policy import TokenClassPolicy, TOKEN_POLICIES, get_policy
from .token_service import TokenService, TokenSettings

__all__ = [
    'TokenClassPolicy',
    'TOKEN_POLICIES',
    'get_policy',
    'TokenService',
    'TokenSettings'
]
