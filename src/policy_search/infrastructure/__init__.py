"""
Infrastructure layer - engine adapters talking to the outside world.
"""

from __future__ import annotations

from .engines import SUPPORTED_ENGINES, create_engine_registry

__all__ = ["SUPPORTED_ENGINES", "create_engine_registry"]
