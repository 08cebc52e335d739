"""Token service module.

This module issues and verifies the platform's signed tokens: short-lived
access tokens, long-lived refresh tokens, and the one-shot email verification
and password reset tokens.

Tokens are HMAC-signed JWTs. Nothing is stored server side; a token stays
valid until its ``exp`` claim passes.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
from uuid import uuid4
import logging

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import SecretStr, ValidationError

from storyswap.config import Settings
from storyswap.constants import (
    DEFAULT_ACCESS_TOKEN_TTL,
    DEFAULT_JWT_ALGORITHM,
    DEFAULT_REFRESH_TOKEN_TTL,
    SUPPORTED_JWT_ALGORITHMS,
    TOKEN_AUDIENCE,
    TOKEN_ISSUER,
)
from storyswap.exceptions import (
    ConfigurationError,
    InvalidTokenTypeError,
    TokenError,
    TokenGenerationError,
    TokenVerificationFailedError,
)
from storyswap.models import SecretKeyspace, TokenClaims, TokenPair, UserProfile
from storyswap.services.token_policy import (
    ACCESS_POLICY,
    EMAIL_VERIFICATION_POLICY,
    PASSWORD_RESET_POLICY,
    REFRESH_POLICY,
    TokenClassPolicy,
)
from storyswap.utils.durations import duration_to_seconds

logger = logging.getLogger(__name__)

ProfileInput = Union[UserProfile, Dict[str, Any], Any]

_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": True,
    "verify_aud": True,
    "verify_iss": True,
    # nbf is checked after decoding so it can be reported separately
    "verify_nbf": False,
    "require_exp": True,
    "require_iat": True,
    "require_sub": True,
    "require_jti": True,
}

def _utc_timestamp() -> int:
    return int(datetime.now(timezone.utc).timestamp())

def _as_secret(value: Union[SecretStr, str, None]) -> SecretStr:
    if isinstance(value, SecretStr):
        return value
    return SecretStr(value or "")

@dataclass(frozen=True)
class TokenSettings:
    """Secrets and lifetimes the token service is constructed with.

    Validated on construction so a misconfigured process fails at startup
    rather than on its first request.

    Raises:
        ConfigurationError: If a secret is empty, the two secrets are equal,
            a lifetime is negative or the algorithm is not supported
    """

    access_secret: SecretStr = field(repr=False)
    refresh_secret: SecretStr = field(repr=False)
    access_ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL
    refresh_ttl: timedelta = DEFAULT_REFRESH_TOKEN_TTL
    algorithm: str = DEFAULT_JWT_ALGORITHM

    def __post_init__(self):
        object.__setattr__(self, "access_secret", _as_secret(self.access_secret))
        object.__setattr__(self, "refresh_secret", _as_secret(self.refresh_secret))

        if not self.access_secret.get_secret_value():
            raise ConfigurationError(
                "JWT secret is required", config_key="JWT_SECRET", expected_type="str"
            )
        if not self.refresh_secret.get_secret_value():
            raise ConfigurationError(
                "Refresh token secret is required",
                config_key="REFRESH_TOKEN_SECRET",
                expected_type="str"
            )
        if self.access_secret.get_secret_value() == self.refresh_secret.get_secret_value():
            raise ConfigurationError(
                "Access and refresh tokens must be signed with different secrets",
                config_key="REFRESH_TOKEN_SECRET"
            )
        for key, ttl in (("JWT_EXPIRES_IN", self.access_ttl), ("REFRESH_TOKEN_EXPIRES_IN", self.refresh_ttl)):
            if ttl < timedelta(0):
                raise ConfigurationError(
                    f"{key} must not be negative", config_key=key, expected_type="duration"
                )
        if self.algorithm not in SUPPORTED_JWT_ALGORITHMS:
            raise ConfigurationError(
                f"Unsupported JWT algorithm: {self.algorithm}",
                config_key="JWT_ALGORITHM",
                expected_type="HS256 | HS384 | HS512"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSettings":
        """Build token settings from application settings."""
        return cls(
            access_secret=settings.JWT_SECRET,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            access_ttl=settings.JWT_EXPIRES_IN,
            refresh_ttl=settings.REFRESH_TOKEN_EXPIRES_IN,
            algorithm=settings.JWT_ALGORITHM,
        )

    def secret_for(self, keyspace: SecretKeyspace) -> str:
        if keyspace == SecretKeyspace.REFRESH:
            return self.refresh_secret.get_secret_value()
        return self.access_secret.get_secret_value()

    def ttl_for(self, policy: TokenClassPolicy) -> timedelta:
        if not policy.ttl_configurable:
            return policy.default_ttl
        if policy.keyspace == SecretKeyspace.REFRESH:
            return self.refresh_ttl
        return self.access_ttl

class TokenService:
    """Issue and verify access, refresh, verification and reset tokens.

    Instances hold only immutable settings and may be shared across threads
    and tasks.
    """

    def __init__(self, token_settings: TokenSettings):
        if not isinstance(token_settings, TokenSettings):
            raise ConfigurationError(
                "TokenService requires TokenSettings",
                config_key="token_settings",
                expected_type="TokenSettings"
            )
        self._settings = token_settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(TokenSettings.from_settings(settings))

    @property
    def access_token_ttl(self) -> timedelta:
        return self._settings.ttl_for(ACCESS_POLICY)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return self._settings.ttl_for(REFRESH_POLICY)

    # Issuing

    def issue_access_token(
        self,
        profile: ProfileInput,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a new access token.

        Args:
            profile: User profile, user record or mapping with at least an id
            expires_delta: Optional lifetime overriding the configured one

        Returns:
            str: Encoded JWT access token

        Raises:
            TokenGenerationError: If the token cannot be built or signed
        """
        return self._issue(ACCESS_POLICY, profile, expires_delta)

    def issue_refresh_token(
        self,
        profile: ProfileInput,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a new refresh token carrying only the subject."""
        return self._issue(REFRESH_POLICY, profile, expires_delta)

    def issue_token_pair(self, user: ProfileInput) -> TokenPair:
        """Create an access and refresh token for a user record.

        Args:
            user: Canonical user record (mapping or object) or UserProfile

        Returns:
            TokenPair: Both tokens, the Bearer scheme and the access lifetime
        """
        profile = self._profile(user, ACCESS_POLICY)
        return TokenPair(
            access_token=self.issue_access_token(profile),
            refresh_token=self.issue_refresh_token(profile),
            expires_in=duration_to_seconds(self.access_token_ttl),
        )

    def issue_email_verification_token(self, profile: ProfileInput) -> str:
        """Create a 24 hour email verification token (subject and email)."""
        return self._issue(EMAIL_VERIFICATION_POLICY, profile)

    def issue_password_reset_token(self, profile: ProfileInput) -> str:
        """Create a 1 hour password reset token (subject and email)."""
        return self._issue(PASSWORD_RESET_POLICY, profile)

    def _profile(self, user: ProfileInput, policy: TokenClassPolicy) -> UserProfile:
        try:
            return UserProfile.from_user(user)
        except (ValidationError, TypeError, ValueError) as e:
            logger.error(f"Invalid user profile for {policy.token_class.value} token: {e}")
            raise TokenGenerationError(token_class=policy.token_class) from e

    def _issue(
        self,
        policy: TokenClassPolicy,
        profile: ProfileInput,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        user = self._profile(profile, policy)
        ttl = expires_delta if expires_delta is not None else self._settings.ttl_for(policy)
        try:
            issued_at = _utc_timestamp()
            claims: Dict[str, Any] = {
                "sub": user.id,
                "type": policy.token_class.value,
                "jti": str(uuid4()),
                "iat": issued_at,
            }
            for name in policy.payload_fields:
                value = getattr(user, name)
                if value is not None:
                    claims[name] = value
            claims.update({
                "iss": TOKEN_ISSUER,
                "aud": TOKEN_AUDIENCE,
                "exp": issued_at + int(ttl.total_seconds()),
            })

            return jwt.encode(
                claims,
                self._settings.secret_for(policy.keyspace),
                algorithm=self._settings.algorithm
            )
        except Exception as e:
            logger.error(
                f"Error generating {policy.token_class.value} token: {e}",
                exc_info=True
            )
            raise TokenGenerationError(token_class=policy.token_class) from e

    # Verification

    def verify_access_token(self, token: str) -> TokenClaims:
        """Verify an access token and return its claims.

        Raises:
            AccessTokenExpiredError: If the token has expired
            InvalidAccessTokenError: If the signature, issuer, audience or
                structure is invalid
            AccessTokenNotActiveError: If the token's not-before time is in
                the future
            InvalidTokenTypeError: If a well-signed token is not an access token
            TokenVerificationFailedError: On any unexpected failure
        """
        return self._verify(ACCESS_POLICY, token)

    def verify_refresh_token(self, token: str) -> TokenClaims:
        """Verify a refresh token and return its claims.

        Raises:
            RefreshTokenExpiredError: If the token has expired
            InvalidRefreshTokenError: If the signature or structure is invalid
            InvalidTokenTypeError: If a well-signed token is not a refresh token
            TokenVerificationFailedError: On any unexpected failure
        """
        return self._verify(REFRESH_POLICY, token)

    def verify_email_verification_token(self, token: str) -> TokenClaims:
        """Verify an email verification token.

        Raises:
            InvalidVerificationTokenError: On any failure
        """
        return self._verify(EMAIL_VERIFICATION_POLICY, token)

    def verify_password_reset_token(self, token: str) -> TokenClaims:
        """Verify a password reset token.

        Raises:
            InvalidResetTokenError: On any failure
        """
        return self._verify(PASSWORD_RESET_POLICY, token)

    def _verify(self, policy: TokenClassPolicy, token: str) -> TokenClaims:
        try:
            return self._decode_and_check(policy, token)
        except TokenError as e:
            if policy.collapsed_error is None:
                raise
            raise policy.collapsed_error(token_class=policy.token_class) from e

    def _decode_and_check(self, policy: TokenClassPolicy, token: str) -> TokenClaims:
        token_class = policy.token_class

        if not isinstance(token, str) or not token:
            logger.warning(f"Missing or non-string {token_class.value} token")
            raise policy.invalid_error(token_class=token_class)

        try:
            payload = jwt.decode(
                token,
                self._settings.secret_for(policy.keyspace),
                algorithms=[self._settings.algorithm],
                audience=TOKEN_AUDIENCE,
                issuer=TOKEN_ISSUER,
                options=_DECODE_OPTIONS,
            )
        except ExpiredSignatureError as e:
            logger.info(f"Expired {token_class.value} token presented")
            raise policy.expired_error(token_class=token_class) from e
        except JWTError as e:
            logger.warning(f"Invalid {token_class.value} token: {e}")
            raise policy.invalid_error(token_class=token_class) from e
        except Exception as e:
            logger.error(f"Error verifying {token_class.value} token: {e}", exc_info=True)
            raise TokenVerificationFailedError(token_class=token_class) from e

        # jose only rejects exp < now; a token is expired from its exp second on
        if int(payload["exp"]) <= _utc_timestamp():
            logger.info(f"Expired {token_class.value} token presented")
            raise policy.expired_error(token_class=token_class)

        not_before = payload.get("nbf")
        if not_before is not None:
            try:
                not_before = int(not_before)
            except (TypeError, ValueError) as e:
                logger.warning(f"Invalid nbf claim on {token_class.value} token")
                raise policy.invalid_error(token_class=token_class) from e
            if not_before > _utc_timestamp():
                logger.warning(f"{token_class.value} token used before its nbf time")
                raise policy.not_active_error(token_class=token_class)

        presented_class = payload.get("type")
        if presented_class != token_class.value:
            logger.warning(
                f"Token class mismatch: expected {token_class.value}, got {presented_class!r}"
            )
            raise InvalidTokenTypeError(token_class=token_class)

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Malformed claims on {token_class.value} token: {e}")
            raise policy.invalid_error(token_class=token_class) from e
