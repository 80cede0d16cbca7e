"""Custom exception classes for the school resource directory.

This module defines application-specific exceptions following Google Python
Style Guide. Every error is recoverable at the point of the user action that
triggered it; none of them is fatal to the application.
"""

from typing import Optional


class SchoolAdminError(Exception):
    """Base exception for all school resource directory errors."""

    pass


class ConfigurationError(SchoolAdminError):
    """Raised when there is a configuration error."""

    pass


class ValidationError(SchoolAdminError):
    """Raised when form data fails validation before leaving the form."""

    pass


class MissingRequiredFieldError(ValidationError):
    """Raised when a required form field is blank."""

    def __init__(self, field: str, message: Optional[str] = None):
        """Initialize the exception.

        Args:
            field: Name of the blank field.
            message: Optional user-facing message. Defaults to a generic one.
        """
        self.field = field
        super().__init__(message or f"'{field}' is required.")


class MissingPasswordError(ValidationError):
    """Raised when a password is required but was left blank."""

    def __init__(self, message: str = "Password is required for new users."):
        super().__init__(message)


class NetworkFailureError(SchoolAdminError):
    """Raised on a non-2xx response or a transport error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        """Initialize the exception.

        Args:
            message: Message to surface to the user verbatim.
            status_code: HTTP status code, None for transport errors.
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class CannotOpenResourceError(SchoolAdminError):
    """Raised when the URL launcher cannot open a resource locator."""

    def __init__(self, url: str, message: Optional[str] = None):
        """Initialize the exception.

        Args:
            url: The locator that could not be opened.
            message: Optional user-facing message.
        """
        self.url = url
        super().__init__(message or f"Cannot open this URL: {url}")
