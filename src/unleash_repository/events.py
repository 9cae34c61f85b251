"""Failure notifications emitted by the repository."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol


class RepositoryEvents:
    """Event names."""

    FETCHING_DATA_FAILED: str = "unleash.client.fetching_data_failed"


@dataclass(frozen=True)
class FetchingDataFailedEvent:
    """Dispatched once per failed live fetch."""

    exception: Exception
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventDispatcher(Protocol):
    """Sink for repository events."""

    def dispatch(self, event: Any, event_name: str) -> Any: ...


EventListener = Callable[[Any], None]


class InMemoryEventDispatcher:
    """Synchronous in-process publish/subscribe dispatcher."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[EventListener]] = {}

    def subscribe(self, event_name: str, listener: EventListener) -> None:
        """Subscribe a listener to an event name."""
        self._listeners.setdefault(event_name, []).append(listener)

    def unsubscribe(self, event_name: str) -> None:
        """Remove all listeners of an event name."""
        self._listeners.pop(event_name, None)

    def dispatch(self, event: Any, event_name: str) -> Any:
        """Call every listener of event_name in subscription order."""
        for listener in self._listeners.get(event_name, []):
            listener(event)
        return event
