"""
Error types for the range slider engine.
"""

from dataclasses import dataclass
from typing import Any, Optional


class RangeSliderError(Exception):
    """Base exception for all range slider errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ConfigurationError(RangeSliderError):
    """
    Raised when a widget is constructed with an invalid numeric domain.

    Examples:
    - step <= 0
    - min > max
    - non-numeric or non-finite bounds/step

    Construction fails; callers should treat this as a programming error,
    not a recoverable runtime fault.
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for a configuration error.

    Attributes:
        field: Name of the offending option (e.g. "step")
        value: The value that was rejected
        widget: Optional widget name the option belongs to
    """

    field: str
    value: Any
    widget: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "price.step=-1"
        """
        location = f"{self.field}={self.value!r}"
        if self.widget:
            location = f"{self.widget}.{location}"
        return location


def make_configuration_error(
    message: str,
    field: str,
    value: Any,
    widget: str | None = None,
) -> ConfigurationError:
    """Convenience function to create a ConfigurationError with context."""
    return ConfigurationError(message, ErrorContext(field=field, value=value, widget=widget))
