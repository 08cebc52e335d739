"""Authentication middleware module."""

import logging
from typing import Callable, Iterable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from storyswap.exceptions import AuthenticationError, TokenError
from storyswap.middleware.error_handler import error_response
from storyswap.services.token_service import TokenService
from storyswap.utils.token_inspector import extract_token_from_header

logger = logging.getLogger(__name__)

class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware for request authentication.

    Verifies the bearer access token on every request outside
    ``exclude_paths`` and stores the verified claims on ``request.state``.
    """

    def __init__(
        self,
        app: ASGIApp,
        token_service: Optional[TokenService] = None,
        exclude_paths: Iterable[str] = ()
    ):
        super().__init__(app)
        # Falls back to app.state.token_service when not given
        self.token_service = token_service
        self.exclude_paths = tuple(exclude_paths)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        """Process incoming requests.

        Args:
            request: Incoming request
            call_next: Next request handler

        Returns:
            Response: Response from next handler, or a 401 error response
        """
        if self._should_skip_auth(request):
            logger.debug(f"Skipping authentication for path: {request.url.path}")
            return await call_next(request)

        token = extract_token_from_header(request.headers.get("Authorization"))
        if not token:
            logger.warning(f"No authentication token provided for path: {request.url.path}")
            return error_response(
                AuthenticationError("Access token is required", error_code="no_token")
            )

        token_service = self.token_service or request.app.state.token_service
        try:
            claims = token_service.verify_access_token(token)
        except TokenError as e:
            logger.warning(f"Authentication failed for path {request.url.path}: {e.error_code}")
            return error_response(e)

        request.state.claims = claims
        request.state.user_id = claims.subject
        request.state.user_role = claims.role

        return await call_next(request)

    def _should_skip_auth(self, request: Request) -> bool:
        """Check if authentication should be skipped for the request."""
        path = request.url.path

        # Match whole path segments: "/health" must not exclude "/healthz-admin"
        for excluded_path in self.exclude_paths:
            if path == excluded_path or path.startswith(excluded_path.rstrip("/") + "/"):
                return True

        # Skip auth for OPTIONS requests (CORS preflight)
        if request.method == "OPTIONS":
            return True

        return False
