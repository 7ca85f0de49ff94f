"""
Exception Definitions - Custom exceptions for the Eliza engine
==============================================================

This module defines all custom exceptions used throughout the engine,
providing clear error handling and meaningful error messages.

A turn that matches no keyword is not an error: the engine answers it from
memory or from the fallback rotation, so no exception exists for it.
"""


class ElizaError(Exception):
    """
    Base exception for all engine errors.

    All custom exceptions in this package inherit from this base class,
    allowing for easy catching of all engine-specific errors.

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


class ScriptError(ElizaError):
    """
    Malformed rule script, detected at load time.

    Raised when:
    - A keyword is defined twice
    - A decomposition pattern has no reassembly templates
    - A placeholder references a wildcard the pattern does not have
    - A redirect names an unknown keyword
    - The fallback list is empty

    An engine is never built from a script that fails validation.
    """
    pass


class ConfigurationError(ElizaError):
    """
    Script defect surfaced while answering a turn.

    Raised when a reassembly placeholder is out of range at substitution
    time or a redirect chain is too deep. A validated script should never
    trigger it; ``details`` names the offending rule and pattern.
    """
    pass


class SettingsError(ElizaError):
    """
    Settings-related errors.

    Raised when there are issues with:
    - Unreadable or unparsable settings files
    - Invalid settings values
    - Environment variable overrides that cannot be converted
    """
    pass
