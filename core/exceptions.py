"""
Custom exception classes for the Shop Admin client and mock server.
Provides specific error handling and better debugging.
"""

from typing import Any, Dict, Optional

class ShopAdminError(Exception):
    """Base exception for Shop Admin operations."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)

class ApiError(ShopAdminError):
    """Raised when the REST API answers with a non-2xx status."""

    def __init__(self, status_code: int, payload: Optional[Dict[str, Any]] = None, message: str = ""):
        self.status_code = status_code
        self.payload = payload if isinstance(payload, dict) else {}
        super().__init__(message or f"Request failed with status code {status_code}")

    @property
    def response_data(self) -> Dict[str, Any]:
        """Parsed response body, the place the backend puts its error text."""
        return self.payload

class NetworkError(ShopAdminError):
    """Raised when the API could not be reached or returned garbage."""
    pass

class ValidationError(ShopAdminError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)

class NotFoundError(ShopAdminError):
    """Raised when trying to access a non-existent record."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} '{identifier}' not found")

class AuthenticationError(ShopAdminError):
    """Raised when authentication fails."""
    pass

class StorageError(ShopAdminError):
    """Raised when the JSON fixture or session file cannot be read or written."""
    pass

class ConfigurationError(ShopAdminError):
    """Raised when configuration is invalid or missing."""
    pass
