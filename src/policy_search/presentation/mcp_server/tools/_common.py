"""
Shared helpers for MCP tools: tool-name overrides, input normalization and
response formatting.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp.exceptions import ToolError

from policy_search.shared.exceptions import InvalidParameterError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

TOOL_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
INT_PATTERN = re.compile(r"-?[0-9]+")


def get_tool_name(env_var: str, default: str) -> str:
    """
    Tool name from *env_var*, or *default* when unset or invalid.

    Names must start with a letter and contain only letters, digits,
    underscores and hyphens.
    """
    name = os.environ.get(env_var, "").strip()
    if not name:
        return default
    if not TOOL_NAME_PATTERN.match(name):
        logger.warning(f"Invalid tool name '{name}' in {env_var}, using default '{default}'")
        return default
    return name


class InputNormalizer:
    """Lenient coercion of agent-supplied tool arguments."""

    @staticmethod
    def normalize_engines(value: str | Sequence[str] | None) -> list[str]:
        """
        Accept ``"baidu,bing"``, ``["Baidu", " bing "]`` or None.

        Returns lower-cased engine names, order kept, duplicates removed.
        """
        if value is None:
            return []
        items: Iterable[str] = value.split(",") if isinstance(value, str) else value
        engines: list[str] = []
        for item in items:
            engine = str(item).strip().lower()
            if engine and engine not in engines:
                engines.append(engine)
        return engines

    @staticmethod
    def normalize_int(value: Any, name: str, low: int, high: int) -> int:
        """
        Coerce ``"20"`` / ``20.0`` to int and check ``low <= value <= high``.

        Raises:
            InvalidParameterError: Not an integer or out of range
        """
        if isinstance(value, bool):
            raise InvalidParameterError(name, value, f"integer between {low} and {high}")
        if isinstance(value, str):
            value = value.strip()
            if INT_PATTERN.fullmatch(value):
                value = int(value)
        elif isinstance(value, float) and value.is_integer():
            value = int(value)
        if not isinstance(value, int) or not low <= value <= high:
            raise InvalidParameterError(name, value, f"integer between {low} and {high}")
        return value

    @staticmethod
    def normalize_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def normalize_optional_str(value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class ResponseFormatter:
    """Builds the text payload of successful tools and the error of failed ones."""

    @staticmethod
    def json(payload: dict[str, Any]) -> str:
        return json.dumps(payload, ensure_ascii=False, indent=2)

    @staticmethod
    def error(label: str, error: Exception | str) -> ToolError:
        """``ToolError("<label> failed: <message>")``, reported to the client with isError set."""
        message = str(error) or type(error).__name__
        return ToolError(f"{label} failed: {message}")


__all__ = [
    "TOOL_NAME_PATTERN",
    "InputNormalizer",
    "ResponseFormatter",
    "get_tool_name",
]
