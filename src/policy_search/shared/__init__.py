"""
Shared module for Policy Search MCP.

Provides:
- Unified exception hierarchy
- Async utilities for engine fan-out
"""

from .async_utils import (
    CircuitBreaker,
    empty_on_failure,
    gather_settled,
)
from .exceptions import (
    AggregateFailureError,
    APIError,
    ConfigurationError,
    EmptyQueryError,
    EngineError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidParameterError,
    NetworkError,
    PolicySearchError,
    RateLimitError,
    UnsupportedEngineError,
    ValidationError,
    get_retry_delay,
    is_retryable_error,
)

__all__ = [
    # Exceptions
    "PolicySearchError",
    "ErrorContext",
    "ErrorSeverity",
    "ErrorCategory",
    "APIError",
    "RateLimitError",
    "NetworkError",
    "EngineError",
    "ValidationError",
    "EmptyQueryError",
    "InvalidParameterError",
    "UnsupportedEngineError",
    "AggregateFailureError",
    "ConfigurationError",
    "is_retryable_error",
    "get_retry_delay",
    # Async utilities
    "empty_on_failure",
    "gather_settled",
    "CircuitBreaker",
]
