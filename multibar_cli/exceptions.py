"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class MultibarError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(MultibarError):
    """Raised for issues related to configuration loading or validation."""


class DownloadError(MultibarError):
    """Raised when a file could not be downloaded after all retry attempts."""
