"""Outcome of one pass through the fallback chain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .exceptions import RepositoryError
from .models import FeatureSnapshot


class FetchOutcome(StrEnum):
    """Which source served the snapshot."""

    FRESH_HIT = "FRESH_HIT"
    FETCHED = "FETCHED"
    STALE_FALLBACK = "STALE_FALLBACK"
    BOOTSTRAP_FALLBACK = "BOOTSTRAP_FALLBACK"
    FATAL = "FATAL"


@dataclass(frozen=True)
class FetchResult:
    """Snapshot plus how it was obtained.

    ``features`` is set for every outcome except FATAL, where ``error`` holds
    the terminal error. ``failure`` is the live-fetch failure that caused a
    fallback, if any.
    """

    outcome: FetchOutcome
    features: FeatureSnapshot | None = None
    error: RepositoryError | None = None
    failure: RepositoryError | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not FetchOutcome.FATAL

    def unwrap(self) -> FeatureSnapshot:
        """Return the snapshot or raise the terminal error."""
        if self.error is not None:
            raise self.error
        assert self.features is not None
        return self.features
