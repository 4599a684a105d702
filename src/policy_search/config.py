"""
Server settings read from the environment.

    DEFAULT_SEARCH_ENGINE   default engine of the generic `search` tool (bing)
    ALLOWED_SEARCH_ENGINES  comma-separated allow list (empty = all)
    USE_PROXY / PROXY_URL   outbound proxy for engine adapters
    SEARCH_TIMEOUT          per-request timeout in seconds (10)
    ADVANCED_SEARCH_ENGINE  engine of the advanced policy search (bing)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from policy_search.domain.entities import EngineName
from policy_search.shared.exceptions import ConfigurationError, ErrorContext

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_PROXY_URL = "http://127.0.0.1:7890"
DEFAULT_TIMEOUT = 10.0

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _supported() -> tuple[str, ...]:
    return tuple(engine.value for engine in EngineName)


def _parse_engine(var: str, value: str) -> str:
    engine = value.strip().lower()
    if engine not in _supported():
        raise ConfigurationError(
            f"{var}={value!r} is not a supported engine",
            context=ErrorContext(
                operation="load_settings",
                input_value=value,
                suggestion=f"Use one of: {', '.join(_supported())}",
            ),
        )
    return engine


def _parse_allowed(value: str) -> tuple[str, ...]:
    allowed: list[str] = []
    for raw in value.split(","):
        engine = raw.strip().lower()
        if not engine:
            continue
        if engine not in _supported():
            logger.warning(f"Ignoring unknown engine in ALLOWED_SEARCH_ENGINES: {engine}")
            continue
        if engine not in allowed:
            allowed.append(engine)
    return tuple(allowed)


@dataclass(frozen=True)
class Settings:
    """Immutable server settings."""

    default_engine: str = EngineName.BING.value
    allowed_engines: tuple[str, ...] = ()
    use_proxy: bool = False
    proxy_url: str = DEFAULT_PROXY_URL
    timeout: float = DEFAULT_TIMEOUT
    advanced_engine: str = EngineName.BING.value

    @property
    def proxy(self) -> str | None:
        """Proxy URL when enabled, else None."""
        return self.proxy_url if self.use_proxy else None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from environment variables.

        Raises:
            ConfigurationError: Unknown default/advanced engine or bad timeout
        """
        env = os.environ if environ is None else environ

        timeout_raw = env.get("SEARCH_TIMEOUT", "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"SEARCH_TIMEOUT={timeout_raw!r} is not a number") from e
        if timeout <= 0:
            raise ConfigurationError(f"SEARCH_TIMEOUT must be positive, got {timeout}")

        return cls(
            default_engine=_parse_engine(
                "DEFAULT_SEARCH_ENGINE", env.get("DEFAULT_SEARCH_ENGINE", "") or EngineName.BING.value
            ),
            allowed_engines=_parse_allowed(env.get("ALLOWED_SEARCH_ENGINES", "")),
            use_proxy=env.get("USE_PROXY", "").strip().lower() in _TRUE_VALUES,
            proxy_url=env.get("PROXY_URL", "").strip() or DEFAULT_PROXY_URL,
            timeout=timeout,
            advanced_engine=_parse_engine(
                "ADVANCED_SEARCH_ENGINE", env.get("ADVANCED_SEARCH_ENGINE", "") or EngineName.BING.value
            ),
        )

    def to_container_config(self) -> dict[str, Any]:
        """Dict for ``ApplicationContainer.config.from_dict``."""
        return {
            "timeout": self.timeout,
            "proxy_url": self.proxy,
            "advanced_engine": self.advanced_engine,
            "default_engine": self.default_engine,
            "allowed_engines": list(self.allowed_engines),
        }


__all__ = ["DEFAULT_PROXY_URL", "DEFAULT_TIMEOUT", "Settings"]
