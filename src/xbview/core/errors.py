"""
Error types for xbview source loading and configuration.

The tokenizer itself never raises: any text renders. These errors belong to
the layers around it.
"""

from dataclasses import dataclass
from typing import Optional


class XbViewError(Exception):
    """Base exception for all xbview errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class SourceError(XbViewError):
    """
    Raised when a listing cannot be loaded.

    Examples:
    - Missing file
    - Undecodable bytes
    - HTTP failure fetching a remote listing
    """

    pass


class ConfigError(XbViewError):
    """
    Raised when xbview.toml cannot be used.

    Examples:
    - Invalid TOML
    - Wrong value types
    """

    pass


@dataclass
class ErrorContext:
    """
    Where an error happened.

    Attributes:
        location: File path or URL
        line: Optional line number (1-indexed)
    """

    location: str
    line: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "xbview.toml:3"
        """
        if self.line is not None:
            return f"{self.location}:{self.line}"
        return self.location


def make_source_error(message: str, location: str) -> SourceError:
    """Helper to create a SourceError pointing at a file or URL."""
    return SourceError(message, ErrorContext(location=location))


def make_config_error(message: str, location: str, line: int | None = None) -> ConfigError:
    """Helper to create a ConfigError with context."""
    return ConfigError(message, ErrorContext(location=location, line=line))
