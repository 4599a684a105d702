"""
Application layer - search use cases built on the domain entities.
"""

from __future__ import annotations

from .search import PolicySearchService

__all__ = ["PolicySearchService"]
