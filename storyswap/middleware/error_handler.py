"""Error handling middleware for the application."""

from typing import Callable
from datetime import datetime, timezone
import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storyswap.constants import AUTH_SCHEME
from storyswap.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseError,
    TokenError,
    TokenExpiredError,
)
from storyswap.logger import log_error

logger = logging.getLogger(__name__)

def error_response(error: BaseError) -> JSONResponse:
    """Build the JSON response for an application error."""
    headers = None
    if error.status_code == 401:
        headers = {"WWW-Authenticate": AUTH_SCHEME}
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict(),
        headers=headers
    )

class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for handling custom exceptions."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        """Process the request and handle any exceptions."""
        try:
            return await call_next(request)

        except TokenExpiredError as e:
            logger.info(f"Expired token on {request.url.path}: {e.error_code}")
            return error_response(e)

        except TokenError as e:
            if e.status_code >= 500:
                logger.error(f"Token service error on {request.url.path}: {e.error_code}")
            else:
                logger.warning(f"Token rejected on {request.url.path}: {e.error_code}")
            return error_response(e)

        except AuthenticationError as e:
            logger.warning(f"Authentication error: {str(e)}")
            return error_response(e)

        except AuthorizationError as e:
            logger.warning(f"Authorization error on {request.method} {request.url.path}: {str(e)}")
            return error_response(e)

        except BaseError as e:
            logger.error(f"Unexpected base error: {str(e)}")
            return error_response(e)

        except Exception as e:
            log_error(e, {"path": request.url.path, "method": request.method}, logger)
            return JSONResponse(
                status_code=500,
                content={
                    'error': 'InternalServerError',
                    'code': 'internal_error',
                    'message': 'An unexpected error occurred',
                    'timestamp': datetime.now(timezone.utc).isoformat()
                }
            )
