"""Event dispatcher unit tests."""

from typing import Any

from unleash_repository import (
    FetchingDataFailedEvent,
    InMemoryEventDispatcher,
    RepositoryEvents,
    TransportError,
)


def test_dispatch_to_subscribers() -> None:
    """Listeners receive events dispatched under their name."""
    dispatcher = InMemoryEventDispatcher()
    received: list[Any] = []
    dispatcher.subscribe(RepositoryEvents.FETCHING_DATA_FAILED, received.append)
    event = FetchingDataFailedEvent(TransportError("connection refused"))
    assert dispatcher.dispatch(event, RepositoryEvents.FETCHING_DATA_FAILED) is event
    assert received == [event]


def test_dispatch_other_name_ignored() -> None:
    """Listeners of other names are not called."""
    dispatcher = InMemoryEventDispatcher()
    received: list[Any] = []
    dispatcher.subscribe("other", received.append)
    dispatcher.dispatch(object(), RepositoryEvents.FETCHING_DATA_FAILED)
    assert received == []


def test_unsubscribe() -> None:
    """Unsubscribed listeners are not called."""
    dispatcher = InMemoryEventDispatcher()
    received: list[Any] = []
    dispatcher.subscribe(RepositoryEvents.FETCHING_DATA_FAILED, received.append)
    dispatcher.unsubscribe(RepositoryEvents.FETCHING_DATA_FAILED)
    dispatcher.dispatch(object(), RepositoryEvents.FETCHING_DATA_FAILED)
    assert received == []


def test_event_carries_exception() -> None:
    """The event exposes the triggering failure."""
    error = TransportError("boom")
    event = FetchingDataFailedEvent(error)
    assert event.exception is error
    assert event.id
    assert event.timestamp.tzinfo is not None
