"""FastAPI dependencies for authentication and authorization."""

from typing import Callable, Iterable, Optional, Union
import logging

from fastapi import Depends, Header, Request

from storyswap.constants import PRIVILEGED_ROLES
from storyswap.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    TokenError,
)
from storyswap.models import TokenClaims
from storyswap.services.token_service import TokenService
from storyswap.utils.token_inspector import extract_token_from_header

# Initialize logger
logger = logging.getLogger(__name__)

def get_token_service(request: Request) -> TokenService:
    """Get the token service created at application startup."""
    token_service = getattr(request.app.state, "token_service", None)
    if token_service is None:
        raise ConfigurationError(
            "Token service is not configured",
            config_key="token_service",
            expected_type="TokenService"
        )
    return token_service

async def get_current_claims(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    token_service: TokenService = Depends(get_token_service)
) -> TokenClaims:
    """Get verified access token claims for the current request.

    Reuses claims already verified by ``AuthMiddleware``.

    Raises:
        AuthenticationError: If no bearer token is present
        TokenError: If the access token fails verification
    """
    claims = getattr(request.state, "claims", None)
    if claims is not None:
        return claims

    token = extract_token_from_header(authorization)
    if not token:
        raise AuthenticationError("Access token is required", error_code="no_token")

    claims = token_service.verify_access_token(token)
    request.state.claims = claims
    return claims

async def get_optional_claims(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    token_service: TokenService = Depends(get_token_service)
) -> Optional[TokenClaims]:
    """Get verified claims if a valid access token is present, else None."""
    claims = getattr(request.state, "claims", None)
    if claims is not None:
        return claims

    token = extract_token_from_header(authorization)
    if not token:
        return None

    try:
        claims = token_service.verify_access_token(token)
    except TokenError as e:
        logger.debug(f"Ignoring unusable optional token: {e.error_code}")
        return None

    request.state.claims = claims
    return claims

def require_roles(*roles: Union[str, Iterable[str]]) -> Callable:
    """Build a dependency that only admits callers with one of ``roles``."""
    allowed = set()
    for role in roles:
        if isinstance(role, str):
            allowed.add(role)
        else:
            allowed.update(role)

    async def check_role(
        request: Request,
        claims: TokenClaims = Depends(get_current_claims)
    ) -> TokenClaims:
        if claims.role not in allowed:
            logger.warning(
                f"Authorization failed - User {claims.subject} ({claims.role}) attempted to access "
                f"{request.method} {request.url.path} requiring roles: {', '.join(sorted(allowed))}"
            )
            raise AuthorizationError(required_permissions=sorted(allowed))
        return claims

    return check_role

def require_ownership_or_admin(param_name: str = "user_id") -> Callable:
    """Build a dependency that admits the resource owner or a privileged role.

    The owner id is read from the path parameter ``param_name``, falling back
    to the query parameter of the same name.
    """

    async def check_ownership(
        request: Request,
        claims: TokenClaims = Depends(get_current_claims)
    ) -> TokenClaims:
        owner_id = request.path_params.get(param_name) or request.query_params.get(param_name)
        is_owner = owner_id is not None and str(owner_id) == claims.subject
        is_admin = claims.role in PRIVILEGED_ROLES

        if not is_owner and not is_admin:
            logger.warning(
                f"Access denied - User {claims.subject} attempted to access "
                f"{request.method} {request.url.path} owned by {owner_id}"
            )
            raise AuthorizationError(
                message="You can only access your own resources",
                error_code="access_denied"
            )
        return claims

    return check_ownership

async def require_verified_email(
    claims: TokenClaims = Depends(get_current_claims)
) -> TokenClaims:
    """Only admit callers whose access token says the email is verified."""
    if not claims.is_verified:
        raise AuthorizationError(
            message="Email verification is required to perform this action",
            error_code="email_not_verified"
        )
    return claims
