"""Custom exceptions used throughout the derbysim package."""

from typing import Any


class DerbySimError(Exception):
    """Base exception for all derbysim errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(DerbySimError):
    """Raised when a race configuration is invalid or cannot be loaded."""

    def __init__(
        self,
        config_key: str | None = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        super().__init__(f"Configuration error for '{config_key}': {message}", details)
        self.config_key = config_key


class RosterIntegrityError(DerbySimError):
    """Raised when the active round references a competitor missing from the roster.

    This signals a corrupted selection step and is never recovered from.
    """

    def __init__(self, competitor_id: int, details: dict[str, Any] | None = None):
        super().__init__(
            f"Competitor {competitor_id} is racing but not in the roster",
            details,
        )
        self.competitor_id = competitor_id
