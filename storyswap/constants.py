"""System-wide constants for the Story Swap token service.

Values here are fixed by the platform and are not read from the environment.
Deployment-tunable values live in ``storyswap.config``.
"""

from datetime import timedelta
from typing import Final, FrozenSet

# API Versioning
API_VERSION: Final[str] = "v1"
API_PREFIX: Final[str] = f"/api/{API_VERSION}"

# Token identity
TOKEN_ISSUER: Final[str] = "hyperlocal-story-swap"
TOKEN_AUDIENCE: Final[str] = "story-swap-users"
AUTH_SCHEME: Final[str] = "Bearer"

# Signing
DEFAULT_JWT_ALGORITHM: Final[str] = "HS256"
SUPPORTED_JWT_ALGORITHMS: Final[FrozenSet[str]] = frozenset({"HS256", "HS384", "HS512"})

# Token lifetimes
DEFAULT_ACCESS_TOKEN_TTL: Final[timedelta] = timedelta(minutes=15)
DEFAULT_REFRESH_TOKEN_TTL: Final[timedelta] = timedelta(days=30)
EMAIL_VERIFICATION_TOKEN_TTL: Final[timedelta] = timedelta(hours=24)
PASSWORD_RESET_TOKEN_TTL: Final[timedelta] = timedelta(hours=1)

# Roles allowed to act on other users' resources
PRIVILEGED_ROLES: Final[FrozenSet[str]] = frozenset({"admin", "moderator"})
