"""Token inspection helpers.

These functions read a token WITHOUT checking its signature. They exist for
display purposes (showing a session countdown, deciding when a client should
refresh) and must never be used to authorize anything. Use
``TokenService.verify_*`` for that.

None of the helpers raise; malformed input degrades to ``None`` or, for
``is_token_expired``, to ``True``.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

from jose import jwt
from jose.exceptions import JOSEError

from storyswap.constants import AUTH_SCHEME

logger = logging.getLogger(__name__)

def decode_token(token: Any) -> Optional[Dict[str, Any]]:
    """Decode a token's claims without verifying it.

    Returns:
        Optional[Dict[str, Any]]: Unverified claims, or None if the token
            cannot be parsed
    """
    if not isinstance(token, str) or not token:
        return None
    try:
        claims = jwt.get_unverified_claims(token)
    except (JOSEError, ValueError, TypeError) as e:
        logger.debug(f"Could not decode token: {e}")
        return None
    return claims if isinstance(claims, dict) else None

def get_token_expiration(token: Any) -> Optional[datetime]:
    """Get a token's expiry as an aware UTC datetime, or None."""
    claims = decode_token(token)
    if not claims:
        return None
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(exp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None

def is_token_expired(token: Any) -> bool:
    """Check whether a token is expired.

    Tokens that cannot be decoded or carry no expiry count as expired.
    """
    expiration = get_token_expiration(token)
    if expiration is None:
        return True
    return datetime.now(timezone.utc) >= expiration

def get_time_until_expiration(token: Any) -> Optional[timedelta]:
    """Time left before a token expires; negative once it has expired."""
    expiration = get_token_expiration(token)
    if expiration is None:
        return None
    return expiration - datetime.now(timezone.utc)

def extract_token_from_header(header: Any) -> Optional[str]:
    """Extract the credential from an ``Authorization: Bearer <token>`` header.

    Only the exact two-part form with the ``Bearer`` scheme is accepted.
    """
    if not isinstance(header, str) or not header:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != AUTH_SCHEME:
        return None
    return parts[1] or None

__all__ = [
    'decode_token',
    'get_token_expiration',
    'is_token_expired',
    'get_time_until_expiration',
    'extract_token_from_header'
]
