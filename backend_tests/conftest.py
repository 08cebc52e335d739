"""
Test configuration for the Story Swap token service.

This module sets up the test environment and the shared fixtures: injected
token secrets, a token service built from them, canonical user records and
an HTTP test client for the FastAPI application.
"""

import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

# Set testing flags in environment
os.environ["APP_ENVIRONMENT"] = "test"

# Load environment variables from .env.test file
backend_dir = Path(__file__).parent.parent
env_test_file = backend_dir / '.env.test'
if env_test_file.exists():
    load_dotenv(env_test_file, override=True)
else:
    os.environ.setdefault("JWT_SECRET", "test_jwt_secret_key_for_testing_only")
    os.environ.setdefault("REFRESH_TOKEN_SECRET", "test_refresh_secret_key_for_testing_only")

# Import the application after environment is configured
from storyswap.config import Settings
from storyswap.main import create_app
from storyswap.services.token_service import TokenService, TokenSettings

TEST_ACCESS_SECRET = "access-secret-used-only-in-tests-0123456789"
TEST_REFRESH_SECRET = "refresh-secret-used-only-in-tests-9876543210"

@pytest.fixture
def token_settings() -> TokenSettings:
    """Token settings with injected test secrets and default lifetimes."""
    return TokenSettings(
        access_secret=TEST_ACCESS_SECRET,
        refresh_secret=TEST_REFRESH_SECRET,
    )

@pytest.fixture
def token_service(token_settings) -> TokenService:
    """Token service built from the test settings."""
    return TokenService(token_settings)

@pytest.fixture
def user_record() -> Dict[str, Any]:
    """A user document as stored by the user service."""
    return {
        "_id": "u1",
        "username": "bob",
        "email": "b@x.com",
        "role": "user",
        "password": "$2b$12$not-a-real-hash",
        "verification": {"email": {"isVerified": True}},
    }

@pytest.fixture
def test_settings(monkeypatch) -> Settings:
    """Application settings that ignore .env files and process secrets."""
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.delenv("REFRESH_TOKEN_SECRET", raising=False)
    return Settings(
        _env_file=None,
        JWT_SECRET=TEST_ACCESS_SECRET,
        REFRESH_TOKEN_SECRET=TEST_REFRESH_SECRET,
        JWT_EXPIRES_IN=timedelta(minutes=15),
    )

@pytest.fixture
def app(test_settings):
    """FastAPI application wired with the test settings."""
    return create_app(settings=test_settings)

@pytest.fixture
def client(app) -> TestClient:
    """HTTP client for the application."""
    return TestClient(app)

@pytest.fixture
def app_token_service(app) -> TokenService:
    """The token service instance the application uses."""
    return app.state.token_service
