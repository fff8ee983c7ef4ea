"""
Exception Definitions - Custom exceptions for SMS Utils
======================================================

This module defines the exceptions raised by the SMS codecs and the
supporting configuration layer, so that callers can tell malformed
input apart from file system trouble.
"""


class SMSUtilsError(Exception):
    """
    Base exception for all SMS Utils errors.

    All custom exceptions in this package inherit from this base class,
    allowing for easy catching of all application-specific errors.

    Attributes:
        message (str): Human-readable error description
        details (dict): Additional error details for debugging
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            details: Optional dictionary with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return formatted error message with details if present."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidArgumentError(SMSUtilsError, ValueError):
    """
    Invalid input to one of the codecs.

    Raised when there are issues with:
    - Phone numbers that are not exactly 9 decimal digits
    - Phone codes of the wrong length or with unknown symbols
    - Phone codes that decode outside the phone number range
    - Header names or values that cannot be serialized
    """
    pass


class EnvelopeIOError(SMSUtilsError, OSError):
    """
    Message file read or write failure.

    Wraps the underlying OSError (available as __cause__) so that
    callers can handle file trouble separately from bad input.
    """

    def __init__(self, message: str, path: str = "", details: dict = None):
        """
        Initialize with the path that failed.

        Args:
            message: Human-readable error description
            path: The file path involved
            details: Optional dictionary with additional error context
        """
        self.path = path
        details = dict(details or {})
        if path:
            details.setdefault("path", path)
        super().__init__(message, details)


class ConfigError(SMSUtilsError):
    """
    Configuration-related errors.

    Raised when there are issues with:
    - Unreadable configuration files
    - Invalid configuration values
    - Configuration parsing errors
    """
    pass
