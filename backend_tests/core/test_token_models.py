"""Tests for token models."""

from enum import Enum
from types import SimpleNamespace
import uuid

import pytest
from pydantic import ValidationError

from storyswap.models import TokenClaims, TokenClass, TokenPair, UserProfile

class Role(str, Enum):
    ADMIN = "admin"

def test_profile_from_user_document(user_record):
    profile = UserProfile.from_user(user_record)

    assert profile.id == "u1"
    assert profile.username == "bob"
    assert profile.email == "b@x.com"
    assert profile.role == "user"
    assert profile.is_verified is True

@pytest.mark.parametrize("key", ["id", "_id", "user_id", "userId"])
def test_profile_accepts_id_aliases(key):
    assert UserProfile.from_user({key: "u7"}).id == "u7"

def test_profile_from_object_coerces_types():
    user = SimpleNamespace(
        id=uuid.UUID("00000000-0000-4000-a000-000000000002"),
        email="c@d.com",
        role=Role.ADMIN,
        is_verified=False,
    )

    profile = UserProfile.from_user(user)

    assert profile.id == "00000000-0000-4000-a000-000000000002"
    assert profile.role == "admin"
    assert profile.is_verified is False
    assert profile.username is None

def test_profile_flag_wins_over_nested_verification():
    profile = UserProfile.from_user({
        "id": "u1",
        "isVerified": False,
        "verification": {"email": {"isVerified": True}},
    })

    assert profile.is_verified is False

@pytest.mark.parametrize("record", [{}, {"id": None}, {"_id": ""}, {"username": "bob"}])
def test_profile_requires_id(record):
    with pytest.raises(ValidationError):
        UserProfile.from_user(record)

def test_claims_use_jwt_names():
    claims = TokenClaims.model_validate({
        "sub": "u1",
        "type": "refresh",
        "iat": 1_700_000_000,
        "jti": "abc",
        "iss": "issuer",
        "aud": "audience",
        "exp": 1_700_000_900,
    })

    assert claims.token_class == TokenClass.REFRESH
    assert claims.expires_at_datetime.timestamp() == 1_700_000_900
    assert claims.to_payload() == {
        "sub": "u1",
        "type": "refresh",
        "iat": 1_700_000_000,
        "jti": "abc",
        "iss": "issuer",
        "aud": "audience",
        "exp": 1_700_000_900,
    }

def test_claims_are_immutable():
    claims = TokenClaims(
        sub="u1", type="access", iat=1, jti="j", iss="i", aud="a", exp=2
    )

    with pytest.raises(ValidationError):
        claims.subject = "u2"

def test_token_pair_serializes_camel_case():
    pair = TokenPair(access_token="a", refresh_token="r", expires_in=900)

    assert pair.model_dump(by_alias=True) == {
        "accessToken": "a",
        "refreshToken": "r",
        "tokenType": "Bearer",
        "expiresIn": 900,
    }
