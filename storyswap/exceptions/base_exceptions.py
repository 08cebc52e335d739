"""Base exceptions for the application."""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone

class BaseError(Exception):
    """Base exception class for all application exceptions."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            'error': self.__class__.__name__,
            'code': self.error_code,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
            'details': self._get_details()
        }

    def _get_details(self) -> Dict[str, Any]:
        """Get additional error details. Override in subclasses."""
        return self.details

class AuthenticationError(BaseError):
    """Raised when a request cannot be authenticated."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: str = "authentication_required",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code=error_code, details=details)

class AuthorizationError(BaseError):
    """Raised when an authenticated caller lacks permission."""

    status_code = 403

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        error_code: str = "insufficient_permissions",
        required_permissions: Optional[List[str]] = None
    ):
        super().__init__(message, error_code=error_code)
        self.required_permissions = required_permissions or []

    def _get_details(self) -> Dict[str, Any]:
        return {'required_permissions': self.required_permissions}

class ConfigurationError(BaseError):
    """Raised when there is a configuration error."""

    def __init__(self, message: str, config_key: str, expected_type: Optional[str] = None):
        super().__init__(message, error_code="configuration_error")
        self.config_key = config_key
        self.expected_type = expected_type

    def _get_details(self) -> Dict[str, Any]:
        return {
            'config_key': self.config_key,
            'expected_type': self.expected_type
        }
