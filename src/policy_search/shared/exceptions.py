"""
Unified Exception Hierarchy for Policy Search MCP.

Exception Hierarchy:
    PolicySearchError (base)
    ├── APIError
    │   ├── RateLimitError
    │   ├── NetworkError
    │   └── EngineError
    ├── ValidationError
    │   ├── EmptyQueryError
    │   ├── InvalidParameterError
    │   └── UnsupportedEngineError
    ├── AggregateFailureError
    └── ConfigurationError

Only EmptyQueryError, InvalidParameterError and AggregateFailureError are
meant to reach the caller. Engine-level errors are absorbed by the aggregator
and degrade to an empty contribution.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    WARNING = auto()  # Recoverable, can continue
    ERROR = auto()  # Failed but can retry
    CRITICAL = auto()  # Cannot continue
    TRANSIENT = auto()  # Temporary, should retry automatically


class ErrorCategory(Enum):
    """Categories for error classification."""

    API = "api"
    VALIDATION = "validation"
    AGGREGATION = "aggregation"
    CONFIGURATION = "config"
    NETWORK = "network"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Rich context for error messages."""

    tool_name: str | None = None
    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    example: str | None = None
    retry_after: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def merged(self, **overrides: Any) -> ErrorContext:
        """Return a copy with the given fields replaced."""
        values = {
            "tool_name": self.tool_name,
            "operation": self.operation,
            "input_value": self.input_value,
            "suggestion": self.suggestion,
            "example": self.example,
            "retry_after": self.retry_after,
            "metadata": self.metadata,
        }
        values.update(overrides)
        return ErrorContext(**values)


class PolicySearchError(Exception):
    """
    Base exception for all Policy Search errors.

    Provides:
    - Structured error context
    - Severity classification
    - Retry guidance
    - Structured logging payload (to_dict)
    """

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.API,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        if self.context.tool_name:
            result["tool"] = self.context.tool_name
        if self.context.suggestion:
            result["suggestion"] = self.context.suggestion
        if self.context.example:
            result["example"] = self.context.example
        if self.context.retry_after:
            result["retry_after_seconds"] = self.context.retry_after
        return result


# =============================================================================
# API Errors
# =============================================================================


class APIError(PolicySearchError):
    """Base class for errors talking to an upstream search engine."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.API,
            retryable=retryable,
        )


class RateLimitError(APIError):
    """Raised when an engine keeps answering 429 or its circuit breaker is open."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: float = 1.0,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(retry_after=retry_after)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Wait and retry the request")
        super().__init__(message, context=ctx, retryable=True)
        self.severity = ErrorSeverity.TRANSIENT


class NetworkError(APIError):
    """Raised for network connectivity issues."""

    def __init__(
        self,
        message: str = "Network connection failed",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context=context, retryable=True)


class EngineError(APIError):
    """Raised by an engine adapter when a search call cannot be completed."""

    def __init__(
        self,
        engine: str,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(f"{engine}: {message}", context=context, retryable=True)
        self.engine = engine


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(PolicySearchError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
            retryable=False,
        )


class EmptyQueryError(ValidationError):
    """Raised when the keyword/query is empty after trimming."""

    def __init__(
        self,
        query: str | None = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(input_value=query)
        if not ctx.suggestion:
            ctx = ctx.merged(suggestion="Provide a non-empty search keyword")
        if not ctx.example:
            ctx = ctx.merged(example='searchPolicy(keyword="人工智能 产业政策")')
        super().__init__("Query string cannot be empty", context=ctx)


class InvalidParameterError(ValidationError):
    """Raised when a parameter value is invalid."""

    def __init__(
        self,
        param_name: str,
        value: Any,
        expected: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(
            input_value=value,
            suggestion=f"Expected {expected}",
        )
        super().__init__(
            f"Invalid parameter '{param_name}': {value!r} (expected {expected})",
            context=ctx,
        )
        self.param_name = param_name


class UnsupportedEngineError(ValidationError):
    """Raised when an engine identifier has no registered adapter."""

    def __init__(
        self,
        engine: str,
        supported: list[str] | tuple[str, ...] = (),
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = (context or ErrorContext()).merged(input_value=engine)
        if supported:
            ctx = ctx.merged(suggestion=f"Use one of: {', '.join(supported)}")
        super().__init__(f"Unsupported search engine: {engine}", context=ctx)
        self.engine = engine


# =============================================================================
# Aggregation / Configuration Errors
# =============================================================================


class AggregateFailureError(PolicySearchError):
    """Raised when the engine fan-out itself cannot be scheduled or joined."""

    def __init__(
        self,
        message: str = "Search fan-out could not be completed",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.AGGREGATION,
            retryable=False,
        )


class ConfigurationError(PolicySearchError):
    """Raised for configuration-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            retryable=False,
        )


# =============================================================================
# Utilities
# =============================================================================


def is_retryable_error(error: Exception) -> bool:
    """Check if an error should be retried."""
    if isinstance(error, PolicySearchError):
        return error.retryable

    error_str = str(error).lower()
    transient_patterns = [
        "rate limit",
        "too many requests",
        "temporarily unavailable",
        "service unavailable",
        "connection reset",
        "timeout",
    ]
    return any(pattern in error_str for pattern in transient_patterns)


def get_retry_delay(error: Exception, attempt: int) -> float:
    """
    Calculate retry delay with exponential backoff.

    Args:
        error: The exception that occurred
        attempt: Current attempt number (0-based)

    Returns:
        Delay in seconds before next retry, capped at 30 seconds
    """
    base_delay = 1.0
    if isinstance(error, PolicySearchError) and error.context.retry_after:
        base_delay = error.context.retry_after

    delay = base_delay * (2**attempt)
    jitter = random.uniform(0, 0.1 * delay)
    return min(delay + jitter, 30.0)
