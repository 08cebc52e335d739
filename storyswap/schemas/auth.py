"""Authentication schemas module.

This module defines the request and response models for authentication endpoints.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

class TokenRequest(BaseModel):
    """Request carrying a one-shot token (email verification or password reset)."""
    token: str = Field(min_length=1)

class VerifiedTokenResponse(BaseModel):
    """Identity confirmed by a one-shot token."""
    subject: str
    email: Optional[str] = None

class SessionResponse(BaseModel):
    """Verified claims of the caller's access token."""
    claims: Dict[str, Any]
    issued_at: datetime
    expires_at: datetime
    expires_in: int

class TokenStatusResponse(BaseModel):
    """Display-only expiry data for the presented token.

    Computed without verifying the token; not an authentication result.
    """
    present: bool
    expired: bool
    expires_at: Optional[datetime] = None
    seconds_remaining: Optional[int] = None
