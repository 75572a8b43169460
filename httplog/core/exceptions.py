"""httplog exception hierarchy."""

from typing import Any


class HttplogError(Exception):
    """Base class for all httplog errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the error.

        Args:
            message: human readable message
            error_code: stable machine readable code
            details: extra context for logs
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class InvalidArgumentError(HttplogError):
    """Raised when a required argument is missing or falsy."""

    def __init__(
        self,
        message: str,
        arguments: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if arguments:
            super_details["arguments"] = arguments
        super().__init__(message, "INVALID_ARGUMENT", super_details)
        self.arguments = arguments or {}


class ConfigurationError(HttplogError):
    """Raised when a configuration value cannot be interpreted."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if key:
            super_details["key"] = key
        super().__init__(message, "CONFIG_ERROR", super_details)
        self.key = key


class DemoFailure(HttplogError):
    """Deliberate failure raised by the demo error routes."""

    def __init__(self, message: str = "Wowza!", details: dict[str, Any] | None = None):
        super().__init__(message, "DEMO_FAILURE", details)
