"""Token class policies.

One entry per token class: which secret signs it, how long it lives, whether
deployments may change that lifetime, which profile fields it carries, and
which errors its verifier raises.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Optional, Tuple, Type

from storyswap.constants import (
    DEFAULT_ACCESS_TOKEN_TTL,
    DEFAULT_REFRESH_TOKEN_TTL,
    EMAIL_VERIFICATION_TOKEN_TTL,
    PASSWORD_RESET_TOKEN_TTL,
)
from storyswap.exceptions import (
    AccessTokenExpiredError,
    AccessTokenNotActiveError,
    InvalidAccessTokenError,
    InvalidRefreshTokenError,
    InvalidResetTokenError,
    InvalidVerificationTokenError,
    RefreshTokenExpiredError,
    TokenError,
    TokenVerificationFailedError,
)
from storyswap.models.enums import SecretKeyspace, TokenClass

@dataclass(frozen=True)
class TokenClassPolicy:
    """Signing and verification policy for a single token class.

    When ``collapsed_error`` is set, every verification failure for the class
    is reported as that one error.
    """

    token_class: TokenClass
    keyspace: SecretKeyspace
    default_ttl: timedelta
    ttl_configurable: bool
    payload_fields: Tuple[str, ...]
    expired_error: Type[TokenError] = TokenVerificationFailedError
    invalid_error: Type[TokenError] = TokenVerificationFailedError
    not_active_error: Type[TokenError] = TokenVerificationFailedError
    collapsed_error: Optional[Type[TokenError]] = None

ACCESS_POLICY = TokenClassPolicy(
    token_class=TokenClass.ACCESS,
    keyspace=SecretKeyspace.ACCESS,
    default_ttl=DEFAULT_ACCESS_TOKEN_TTL,
    ttl_configurable=True,
    payload_fields=("id", "username", "email", "role", "is_verified"),
    expired_error=AccessTokenExpiredError,
    invalid_error=InvalidAccessTokenError,
    not_active_error=AccessTokenNotActiveError,
)

# Minimal payload: refresh tokens live for weeks
REFRESH_POLICY = TokenClassPolicy(
    token_class=TokenClass.REFRESH,
    keyspace=SecretKeyspace.REFRESH,
    default_ttl=DEFAULT_REFRESH_TOKEN_TTL,
    ttl_configurable=True,
    payload_fields=(),
    expired_error=RefreshTokenExpiredError,
    invalid_error=InvalidRefreshTokenError,
)

EMAIL_VERIFICATION_POLICY = TokenClassPolicy(
    token_class=TokenClass.EMAIL_VERIFICATION,
    keyspace=SecretKeyspace.ACCESS,
    default_ttl=EMAIL_VERIFICATION_TOKEN_TTL,
    ttl_configurable=False,
    payload_fields=("email",),
    collapsed_error=InvalidVerificationTokenError,
)

PASSWORD_RESET_POLICY = TokenClassPolicy(
    token_class=TokenClass.PASSWORD_RESET,
    keyspace=SecretKeyspace.ACCESS,
    default_ttl=PASSWORD_RESET_TOKEN_TTL,
    ttl_configurable=False,
    payload_fields=("email",),
    collapsed_error=InvalidResetTokenError,
)

TOKEN_POLICIES: Dict[TokenClass, TokenClassPolicy] = {
    policy.token_class: policy
    for policy in (
        ACCESS_POLICY,
        REFRESH_POLICY,
        EMAIL_VERIFICATION_POLICY,
        PASSWORD_RESET_POLICY,
    )
}

def get_policy(token_class: TokenClass) -> TokenClassPolicy:
    """Get the policy for a token class."""
    return TOKEN_POLICIES[TokenClass(token_class)]
