"""Token models module.

Pydantic models for the data that flows through the token service: the user
profile subset that goes into tokens, the verified claims that come out of
them, and the access/refresh pair handed to clients.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from storyswap.constants import AUTH_SCHEME
from storyswap.models.enums import TokenClass

__all__ = ['UserProfile', 'TokenClaims', 'TokenPair']

_USER_ATTRIBUTES = (
    "id", "_id", "user_id", "userId",
    "username", "email", "role",
    "is_verified", "isVerified", "verification",
)

def _lookup(source: Any, key: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(key)
    return getattr(source, key, None)

def _email_verified(verification: Any) -> Optional[bool]:
    """Read ``verification.email.is_verified`` from a nested user record."""
    email = _lookup(verification, "email")
    for key in ("is_verified", "isVerified"):
        value = _lookup(email, key)
        if value is not None:
            return bool(value)
    return None

class UserProfile(BaseModel):
    """The subset of a user record that tokens may carry."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id", "user_id", "userId"))
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    is_verified: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("is_verified", "isVerified")
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """User ids may be UUIDs, ObjectIds or ints; claims always hold strings."""
        if v is None or str(v) == "":
            raise ValueError("user id is required")
        return str(v)

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v

    @classmethod
    def from_user(cls, user: Any) -> "UserProfile":
        """Build a profile from a canonical user record.

        Accepts a UserProfile, a mapping (for example a document from the user
        collection) or any object exposing the user attributes.
        """
        if isinstance(user, UserProfile):
            return user
        if isinstance(user, Mapping):
            data = dict(user)
        else:
            data = {
                name: getattr(user, name)
                for name in _USER_ATTRIBUTES
                if getattr(user, name, None) is not None
            }
        if data.get("is_verified") is None and data.get("isVerified") is None:
            verified = _email_verified(data.get("verification"))
            if verified is not None:
                data["is_verified"] = verified
        return cls.model_validate(data)

class TokenClaims(BaseModel):
    """Claims of a token that passed signature, expiry and class checks.

    Only the token service constructs these. Unverified payloads are plain
    dicts returned by ``storyswap.utils.token_inspector``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    subject: str = Field(alias="sub")
    token_class: TokenClass = Field(alias="type")
    issued_at: int = Field(alias="iat")
    unique_id: str = Field(alias="jti")
    issuer: str = Field(alias="iss")
    audience: str = Field(alias="aud")
    expires_at: int = Field(alias="exp")
    not_before: Optional[int] = Field(default=None, alias="nbf")

    # Profile fields, present on access tokens and (email only) on
    # verification and reset tokens
    user_id: Optional[str] = Field(default=None, alias="id")
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    is_verified: Optional[bool] = None

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=timezone.utc)

    @property
    def issued_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.issued_at, tz=timezone.utc)

    def to_payload(self) -> Dict[str, Any]:
        """Claims under their JWT names, without empty optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

class TokenPair(BaseModel):
    """Access and refresh token response model."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    access_token: str
    refresh_token: str
    token_type: str = AUTH_SCHEME
    expires_in: int
