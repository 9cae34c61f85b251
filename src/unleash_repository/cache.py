"""Cache contract used by the repository."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CacheKey:
    """Cache keys of the two regions the repository writes."""

    FEATURES: str = "unleash.client.feature.list"
    FEATURES_RESPONSE: str = "unleash.client.feature.response"


class CacheInterface(ABC):
    """Key-value cache with per-entry TTL."""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Return True when a live entry exists for key."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored for key, or default."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store value under key. ttl is in seconds; None keeps it forever."""
        ...
