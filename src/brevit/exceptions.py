"""Enhanced exception classes with rich context"""

from typing import Any
from datetime import datetime


class BrevitError(Exception):
    """Base exception with enhanced context and metadata"""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        recoverable: bool = False,
        user_message: str | None = None,
    ):
        """
        Initialize exception with context.

        Args:
            message: Technical error message for logs
            details: Additional context (dict for structured logging)
            recoverable: Whether the pipeline can degrade to a textual result
            user_message: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.user_message = user_message or message
        self.timestamp = datetime.now()

    def __str__(self) -> str:
        parts = [self.message]

        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({details_str})")

        if self.recoverable:
            parts.append("[recoverable]")

        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "user_message": self.user_message,
            "timestamp": self.timestamp.isoformat(),
        }


class MalformedInputError(BrevitError):
    """Text shaped like JSON failed to parse"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            details=details,
            recoverable=True,  # Rendered as an error line
            user_message=f"[Error: Invalid JSON - {message}]",
        )


class SerializationFailureError(BrevitError):
    """Structured input could not be converted to a value tree"""

    def __init__(self, message: str, type_name: str, details: dict[str, Any] | None = None):
        details = details or {}
        details["type_name"] = type_name

        super().__init__(
            message=message,
            details=details,
            recoverable=True,  # Rendered as a diagnostic line
            user_message=f"[Error: Could not process object {type_name}]",
        )
        self.type_name = type_name


class SummarizationError(BrevitError):
    """Long-text summarization collaborator failed"""

    def __init__(self, message: str, model: str, details: dict[str, Any] | None = None):
        details = details or {}
        details["model"] = model

        super().__init__(
            message=message,
            details=details,
            recoverable=True,  # Can fall back to the stub summary
            user_message="Summarization failed. Using stub summary.",
        )
        self.model = model


class ConfigurationError(BrevitError):
    """Configuration validation errors"""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value

        super().__init__(
            message=message,
            details=details,
            recoverable=False,  # Config errors require fix
            user_message=f"Configuration error: {message}",
        )
        self.field = field
        self.value = value
