"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from policy_search.shared.exceptions import (
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


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error", "parent"),
        [
            (RateLimitError(), APIError),
            (NetworkError(), APIError),
            (EngineError("bing", "boom"), APIError),
            (EmptyQueryError(), ValidationError),
            (InvalidParameterError("limit", 0, "1-50"), ValidationError),
            (UnsupportedEngineError("google"), ValidationError),
            (AggregateFailureError(), PolicySearchError),
            (ConfigurationError("bad"), PolicySearchError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, PolicySearchError)


class TestMessages:
    def test_empty_query(self):
        error = EmptyQueryError("  ")
        assert str(error) == "Query string cannot be empty"
        assert error.context.input_value == "  "
        assert error.context.suggestion

    def test_invalid_parameter(self):
        error = InvalidParameterError("limit", 0, "integer between 1 and 50")
        assert str(error) == "Invalid parameter 'limit': 0 (expected integer between 1 and 50)"
        assert error.param_name == "limit"

    def test_unsupported_engine(self):
        error = UnsupportedEngineError("google", ["baidu", "bing"])
        assert str(error) == "Unsupported search engine: google"
        assert error.context.suggestion == "Use one of: baidu, bing"

    def test_engine_error(self):
        error = EngineError("baidu", "HTTP error 403: Forbidden")
        assert str(error) == "baidu: HTTP error 403: Forbidden"
        assert error.engine == "baidu"
        assert error.retryable


class TestSerialization:
    def test_to_dict(self):
        error = RateLimitError(retry_after=5.0, context=ErrorContext(tool_name="searchPolicy"))

        data = error.to_dict()

        assert data["error"] == "Rate limit exceeded"
        assert data["category"] == ErrorCategory.API.value
        assert data["severity"] == ErrorSeverity.TRANSIENT.name.lower()
        assert data["retryable"] is True
        assert data["tool"] == "searchPolicy"
        assert data["retry_after_seconds"] == 5.0

    def test_aggregate_failure_is_critical(self):
        error = AggregateFailureError()
        assert error.severity is ErrorSeverity.CRITICAL
        assert error.category is ErrorCategory.AGGREGATION
        assert not error.retryable


class TestRetryHelpers:
    def test_is_retryable(self):
        assert is_retryable_error(EngineError("bing", "503"))
        assert not is_retryable_error(EmptyQueryError())
        assert is_retryable_error(RuntimeError("Connection reset by peer"))
        assert not is_retryable_error(RuntimeError("bad selector"))

    def test_retry_delay_capped(self):
        assert get_retry_delay(RuntimeError("x"), 10) == 30.0

    def test_retry_delay_uses_retry_after(self):
        delay = get_retry_delay(RateLimitError(retry_after=4.0), 0)
        assert 4.0 <= delay <= 4.4
