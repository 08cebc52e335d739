"""Authentication router module.

Thin endpoints over the token service. Account state (users, passwords,
verification flags) lives in other services; these routes only report what a
token proves.
"""

from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Header

from storyswap.dependencies import get_current_claims, get_token_service
from storyswap.models import TokenClaims
from storyswap.schemas.auth import (
    SessionResponse,
    TokenRequest,
    TokenStatusResponse,
    VerifiedTokenResponse,
)
from storyswap.services.token_service import TokenService
from storyswap.utils import token_inspector

logger = logging.getLogger(__name__)

router = APIRouter()

# Paths (relative to the router) that do not take an access token
PUBLIC_PATHS = (
    "/token-status",
    "/email-verification/verify",
    "/password-reset/verify",
)

@router.get("/me", response_model=SessionResponse)
async def read_session(
    claims: TokenClaims = Depends(get_current_claims)
) -> SessionResponse:
    """Return the verified claims of the caller's access token."""
    now = int(datetime.now(timezone.utc).timestamp())
    return SessionResponse(
        claims=claims.to_payload(),
        issued_at=claims.issued_at_datetime,
        expires_at=claims.expires_at_datetime,
        expires_in=max(0, claims.expires_at - now)
    )

@router.get("/token-status", response_model=TokenStatusResponse)
async def read_token_status(
    authorization: Optional[str] = Header(default=None)
) -> TokenStatusResponse:
    """Report when the presented token expires, for client-side countdowns.

    The token is decoded but NOT verified.
    """
    token = token_inspector.extract_token_from_header(authorization)
    if token is None:
        return TokenStatusResponse(present=False, expired=True)

    remaining = token_inspector.get_time_until_expiration(token)
    return TokenStatusResponse(
        present=True,
        expired=token_inspector.is_token_expired(token),
        expires_at=token_inspector.get_token_expiration(token),
        seconds_remaining=int(remaining.total_seconds()) if remaining is not None else None
    )

@router.post("/email-verification/verify", response_model=VerifiedTokenResponse)
async def verify_email_token(
    payload: TokenRequest,
    token_service: TokenService = Depends(get_token_service)
) -> VerifiedTokenResponse:
    """Check an email verification token and return the identity it proves."""
    claims = token_service.verify_email_verification_token(payload.token)
    logger.info(f"Email verification token accepted for user {claims.subject}")
    return VerifiedTokenResponse(subject=claims.subject, email=claims.email)

@router.post("/password-reset/verify", response_model=VerifiedTokenResponse)
async def verify_password_reset_token(
    payload: TokenRequest,
    token_service: TokenService = Depends(get_token_service)
) -> VerifiedTokenResponse:
    """Check a password reset token and return the identity it proves."""
    claims = token_service.verify_password_reset_token(payload.token)
    logger.info(f"Password reset token accepted for user {claims.subject}")
    return VerifiedTokenResponse(subject=claims.subject, email=claims.email)
