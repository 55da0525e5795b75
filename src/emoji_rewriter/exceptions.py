"""Custom exception hierarchy for emoji-rewriter.

Exception hierarchy:
- EmojiRewriterError (base)
  - ConfigurationError: invalid configuration
    - SequencePackError: malformed sequence pack file
    - InvalidOptionError: bad RewriteOptions value
  - ValidationError: request input validation
    - InputTooLargeError: input over the configured limit

The matching and rewriting engine itself does not raise on well-formed
string or DOM input. These errors cover configuration and the HTTP layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # Generic
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    SEQUENCE_PACK_ERROR = "SEQUENCE_PACK_ERROR"
    INVALID_OPTION = "INVALID_OPTION"

    # Validation
    INPUT_TOO_LARGE = "INPUT_TOO_LARGE"


@dataclass
class ErrorContext:
    """Extra context attached to an error."""

    request_id: str | None = None
    operation: str | None = None
    details: dict[str, Any] | None = None


class EmojiRewriterError(Exception):
    """Base exception for emoji-rewriter.

    Carries an HTTP status code and an error code so the HTTP layer can
    render it without a lookup table.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.context = context or ErrorContext()

    def to_dict(self) -> dict[str, Any]:
        """Convert the error into a serializable dictionary."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "request_id": self.context.request_id,
            "details": self.context.details,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(EmojiRewriterError):
    """Invalid configuration."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        status_code: int = 500,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, error_code, status_code, context)


class SequencePackError(ConfigurationError):
    """Sequence pack file could not be parsed."""

    def __init__(
        self,
        message: str = "Invalid sequence pack",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.SEQUENCE_PACK_ERROR, 500, context)


class InvalidOptionError(ConfigurationError):
    """A rewrite option has the wrong type or value."""

    def __init__(
        self,
        option: str,
        reason: str,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext()
        ctx.details = {"option": option, "reason": reason}
        super().__init__(
            f"Invalid rewrite option '{option}': {reason}",
            ErrorCode.INVALID_OPTION,
            400,
            ctx,
        )


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(EmojiRewriterError):
    """Input validation error."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, error_code, status_code, context)


class InputTooLargeError(ValidationError):
    """Input exceeds the configured size limit."""

    def __init__(
        self,
        field: str,
        limit: int,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext()
        ctx.details = {"field": field, "limit": limit}
        super().__init__(
            f"Field '{field}' exceeds {limit} characters",
            ErrorCode.INPUT_TOO_LARGE,
            413,
            ctx,
        )
