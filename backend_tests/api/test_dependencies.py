"""Tests for the authentication and authorization dependencies."""

from datetime import timedelta
from typing import Optional

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from storyswap.dependencies import (
    get_current_claims,
    get_optional_claims,
    get_token_service,
    require_ownership_or_admin,
    require_roles,
    require_verified_email,
)
from storyswap.exceptions import AuthenticationError, AuthorizationError
from storyswap.middleware import ErrorHandlerMiddleware
from storyswap.models import TokenClaims

@pytest.fixture
def guarded_client(token_service) -> TestClient:
    """An app using the dependencies directly, without AuthMiddleware."""
    app = FastAPI()
    app.state.token_service = token_service
    app.add_middleware(ErrorHandlerMiddleware)

    @app.get("/stories/mine")
    async def my_stories(claims: TokenClaims = Depends(get_current_claims)):
        return {"subject": claims.subject}

    @app.get("/stories/feed")
    async def feed(claims: Optional[TokenClaims] = Depends(get_optional_claims)):
        return {"subject": claims.subject if claims else None}

    @app.delete("/admin/stories/{story_id}")
    async def remove_story(story_id: str, claims: TokenClaims = Depends(require_roles("admin", "moderator"))):
        return {"removed": story_id, "by": claims.subject}

    @app.post("/swaps")
    async def request_swap(claims: TokenClaims = Depends(require_verified_email)):
        return {"requested_by": claims.subject}

    @app.get("/users/{user_id}/stories")
    async def user_stories(user_id: str, claims: TokenClaims = Depends(require_ownership_or_admin())):
        return {"owner": user_id, "viewer": claims.subject}

    @app.get("/bookmarks")
    async def bookmarks(claims: TokenClaims = Depends(require_ownership_or_admin("owner"))):
        return {"viewer": claims.subject}

    return TestClient(app)

def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}

def test_current_claims(guarded_client, token_service):
    token = token_service.issue_access_token({"id": "u1"})

    response = guarded_client.get("/stories/mine", headers=_bearer(token))

    assert response.status_code == 200
    assert response.json() == {"subject": "u1"}

def test_current_claims_missing_token(guarded_client):
    response = guarded_client.get("/stories/mine")

    assert response.status_code == 401
    assert response.json()["code"] == "no_token"

def test_current_claims_expired_token(guarded_client, token_service):
    token = token_service.issue_access_token({"id": "u1"}, expires_delta=timedelta(seconds=-1))

    response = guarded_client.get("/stories/mine", headers=_bearer(token))

    assert response.status_code == 401
    assert response.json()["code"] == "access_token_expired"

@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer garbage"}, {"Authorization": "Token x"}])
def test_optional_claims_tolerate_bad_tokens(guarded_client, headers):
    response = guarded_client.get("/stories/feed", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"subject": None}

def test_optional_claims_with_valid_token(guarded_client, token_service):
    token = token_service.issue_access_token({"id": "u3"})

    response = guarded_client.get("/stories/feed", headers=_bearer(token))

    assert response.json() == {"subject": "u3"}

def test_role_guard_admits_listed_roles(guarded_client, token_service):
    token = token_service.issue_access_token({"id": "mod1", "role": "moderator"})

    response = guarded_client.delete("/admin/stories/s1", headers=_bearer(token))

    assert response.status_code == 200
    assert response.json() == {"removed": "s1", "by": "mod1"}

@pytest.mark.parametrize("profile", [{"id": "u1", "role": "user"}, {"id": "u1"}])
def test_role_guard_rejects_other_roles(guarded_client, token_service, profile):
    token = token_service.issue_access_token(profile)

    response = guarded_client.delete("/admin/stories/s1", headers=_bearer(token))

    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "insufficient_permissions"
    assert body["details"]["required_permissions"] == ["admin", "moderator"]

def test_verified_email_guard(guarded_client, token_service):
    verified = token_service.issue_access_token({"id": "u1", "is_verified": True})
    unverified = token_service.issue_access_token({"id": "u2", "is_verified": False})

    assert guarded_client.post("/swaps", headers=_bearer(verified)).status_code == 200

    response = guarded_client.post("/swaps", headers=_bearer(unverified))
    assert response.status_code == 403
    assert response.json()["code"] == "email_not_verified"

@pytest.mark.parametrize("profile", [{"id": "u1"}, {"id": "a1", "role": "admin"}, {"id": "m1", "role": "moderator"}])
def test_ownership_guard_admits_owner_and_staff(guarded_client, token_service, profile):
    token = token_service.issue_access_token(profile)

    response = guarded_client.get("/users/u1/stories", headers=_bearer(token))

    assert response.status_code == 200
    assert response.json() == {"owner": "u1", "viewer": profile["id"]}

def test_ownership_guard_rejects_other_users(guarded_client, token_service):
    token = token_service.issue_access_token({"id": "u2", "role": "user"})

    response = guarded_client.get("/users/u1/stories", headers=_bearer(token))

    assert response.status_code == 403
    assert response.json()["code"] == "access_denied"

def test_ownership_guard_reads_query_parameter(guarded_client, token_service):
    token = token_service.issue_access_token({"id": "u1"})

    assert guarded_client.get("/bookmarks?owner=u1", headers=_bearer(token)).status_code == 200
    assert guarded_client.get("/bookmarks?owner=u2", headers=_bearer(token)).status_code == 403
    assert guarded_client.get("/bookmarks", headers=_bearer(token)).status_code == 403

def test_missing_token_service_is_configuration_error():
    app = FastAPI()
    app.add_middleware(ErrorHandlerMiddleware)

    @app.get("/probe")
    async def probe(service=Depends(get_token_service)):
        return {"ok": True}

    response = TestClient(app).get("/probe")

    assert response.status_code == 500
    assert response.json()["code"] == "configuration_error"

def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": [], "state": {}})

@pytest.mark.asyncio
async def test_current_claims_cached_on_request(token_service):
    request = _request()
    token = token_service.issue_access_token({"id": "u1"})

    claims = await get_current_claims(request, f"Bearer {token}", token_service)

    assert request.state.claims is claims
    assert await get_current_claims(request, None, token_service) is claims

@pytest.mark.asyncio
async def test_current_claims_raise_without_token(token_service):
    with pytest.raises(AuthenticationError) as exc_info:
        await get_current_claims(_request(), None, token_service)

    assert exc_info.value.error_code == "no_token"

@pytest.mark.asyncio
async def test_verified_email_guard_direct(token_service):
    claims = token_service.verify_access_token(token_service.issue_access_token({"id": "u1"}))

    with pytest.raises(AuthorizationError):
        await require_verified_email(claims)
