"""Middleware initialization and configuration."""

from typing import Iterable

from fastapi import FastAPI

from .auth import AuthMiddleware
from .error_handler import ErrorHandlerMiddleware, error_response

__all__ = [
    "AuthMiddleware",
    "ErrorHandlerMiddleware",
    "error_response",
    "setup_middleware"
]

def setup_middleware(app: FastAPI, exclude_paths: Iterable[str]) -> None:
    """Configure and add middleware to the FastAPI application.

    The order of middleware is important:
    1. Error handler (outermost) - turns application errors into JSON responses
    2. Auth - verifies access tokens for everything outside ``exclude_paths``
    """
    # Middleware added last runs first
    app.add_middleware(AuthMiddleware, exclude_paths=tuple(exclude_paths))
    app.add_middleware(ErrorHandlerMiddleware)
