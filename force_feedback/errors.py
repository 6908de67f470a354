"""Structured error types for force-feedback.

Every failure the core raises belongs to one category. Analysis errors are
absorbed at the analysis-pass boundary; edit application errors are surfaced
to the host unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """Categories of force-feedback errors."""

    INVALID_INPUT = "invalid_input"  # Precondition violation
    ANALYSIS = "analysis"  # Syntax provider failure or incomplete data
    EDIT_APPLICATION = "edit_application"  # Buffer refused a synthetic edit
    CONFIGURATION = "configuration"  # Unreadable or invalid configuration


@dataclass
class ForceFeedbackError(Exception):
    """Base class for structured force-feedback errors.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        details: Optional additional details dict.
    """

    category: ErrorCategory
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        detail_text = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({detail_text})"


class InvalidInputError(ForceFeedbackError):
    """A required argument to a public operation was missing."""

    def __init__(self, argument: str) -> None:
        super().__init__(
            category=ErrorCategory.INVALID_INPUT,
            message=f"Required argument '{argument}' must not be None",
            details={"argument": argument},
        )


class AnalysisError(ForceFeedbackError):
    """The syntax provider failed or returned incomplete data."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(
            category=ErrorCategory.ANALYSIS, message=message, details=details
        )


class EditApplicationError(ForceFeedbackError):
    """A synthetic edit could not be applied to the buffer."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(
            category=ErrorCategory.EDIT_APPLICATION, message=message, details=details
        )


class ConfigurationError(ForceFeedbackError):
    """Configuration could not be read or failed validation."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(
            category=ErrorCategory.CONFIGURATION, message=message, details=details
        )


def require(value: T | None, argument: str) -> T:
    """Return value, raising InvalidInputError when it is None."""
    if value is None:
        raise InvalidInputError(argument)
    return value
