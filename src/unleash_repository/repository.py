"""Feature repository with fresh cache, stale cache and bootstrap fallbacks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from .cache import CacheKey
from .config import UnleashConfiguration
from .events import FetchingDataFailedEvent, RepositoryEvents
from .exceptions import (
    BootstrapError,
    ConfigurationError,
    ExhaustionError,
    PayloadError,
    RepositoryError,
    RepositoryErrorCodes,
    TransportError,
    UpstreamStatusError,
)
from .models import Feature, FeatureSnapshot
from .outcome import FetchOutcome, FetchResult
from .parser import decode_payload, parse_features

logger = structlog.stdlib.get_logger(__name__)

_MISS = object()


class UnleashRepository(ABC):
    """Source of the current feature snapshot."""

    @abstractmethod
    def find_feature(self, feature_name: str) -> Feature | None:
        ...

    @abstractmethod
    def get_features(self) -> FeatureSnapshot:
        ...


class DefaultUnleashRepository(UnleashRepository):
    """Resolves the feature snapshot through the fallback chain.

    Order: fresh cache, live fetch (or bootstrap when fetching is disabled),
    stale cache, bootstrap. Each call does at most one HTTP request and never
    retries. The instance keeps no state besides its collaborators.
    """

    def __init__(
        self,
        configuration: UnleashConfiguration,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._configuration = configuration
        self._http_client = http_client

    def find_feature(self, feature_name: str) -> Feature | None:
        return self.get_features().get(feature_name)

    def get_features(self) -> FeatureSnapshot:
        """Return the current snapshot.

        Raises:
            ConfigurationError: fetching is disabled and no bootstrap is set
            PayloadError: the selected raw payload cannot be parsed
            ExhaustionError: no payload is available from any source
        """
        return self.resolve().unwrap()

    def resolve(self) -> FetchResult:
        """Run the fallback chain and report which source served the snapshot.

        Never raises RepositoryError; terminal failures come back as a FATAL
        result.
        """
        try:
            return self._resolve()
        except RepositoryError as e:
            logger.error("Resolving features failed", code=e.code, error=str(e))
            return FetchResult(
                FetchOutcome.FATAL,
                error=e,
                status_code=getattr(e, "status_code", None),
            )

    def _resolve(self) -> FetchResult:
        cached = self._get_cached_features()
        if cached is not None:
            logger.debug("Serving features from cache")
            return FetchResult(FetchOutcome.FRESH_HIT, features=cached)

        if not self._configuration.fetching_enabled:
            raw, bootstrap_error = self._get_bootstrapped_response()
            if raw is None:
                raise ConfigurationError(
                    "Fetching of Unleash api is disabled but no bootstrap is provided",
                    code=RepositoryErrorCodes.FETCHING_DISABLED,
                    cause=bootstrap_error,
                )
            return self._commit(FetchOutcome.BOOTSTRAP_FALLBACK, decode_payload(raw))

        # Read before the live branch overwrites it; fallbacks use this value.
        last_valid = self._get_last_valid_state()
        status_code: int | None = None
        failure: RepositoryError | None = None
        try:
            response = self._send_request()
            status_code = response.status_code
            if status_code != 200:
                raise UpstreamStatusError(status_code)
            raw = response.text
            data = decode_payload(raw)
            self._set_last_valid_state(raw)
            features = parse_features(data)
        except (TransportError, UpstreamStatusError, PayloadError) as e:
            failure = e
            self._notify_failure(e, status_code)
        else:
            return self._store(FetchOutcome.FETCHED, features, status_code=status_code)

        if last_valid is not None:
            logger.info("Falling back to last valid response", status_code=status_code)
            return self._commit(
                FetchOutcome.STALE_FALLBACK,
                decode_payload(last_valid),
                status_code=status_code,
                failure=failure,
            )

        raw, bootstrap_error = self._get_bootstrapped_response()
        if raw is not None:
            logger.info("Falling back to bootstrap", status_code=status_code)
            return self._commit(
                FetchOutcome.BOOTSTRAP_FALLBACK,
                decode_payload(raw),
                status_code=status_code,
                failure=failure,
            )

        raise ExhaustionError(
            "Got invalid response code when getting features and no default bootstrap "
            f"provided: {status_code if status_code is not None else 'unknown response status code'}",
            status_code=status_code,
            cause=bootstrap_error or failure,
        )

    def _commit(
        self,
        outcome: FetchOutcome,
        data: dict[str, Any],
        status_code: int | None = None,
        failure: RepositoryError | None = None,
    ) -> FetchResult:
        return self._store(outcome, parse_features(data), status_code=status_code, failure=failure)

    def _store(
        self,
        outcome: FetchOutcome,
        features: FeatureSnapshot,
        status_code: int | None = None,
        failure: RepositoryError | None = None,
    ) -> FetchResult:
        self._set_cache(features)
        return FetchResult(outcome, features=features, failure=failure, status_code=status_code)

    def _make_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._configuration.timeout_seconds,
            transport=self._configuration.transport,
        )

    def _send_request(self) -> httpx.Response:
        config = self._configuration
        try:
            if self._http_client is not None:
                return self._http_client.get(config.features_url, headers=config.request_headers())
            with self._make_client() as client:
                return client.get(config.features_url, headers=config.request_headers())
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to fetch features: {e}", cause=e) from e

    def _notify_failure(self, failure: RepositoryError, status_code: int | None) -> None:
        logger.warning(
            "Fetching features failed",
            code=failure.code,
            status_code=status_code,
            error=str(failure),
        )
        try:
            self._configuration.event_dispatcher.dispatch(
                FetchingDataFailedEvent(failure),
                RepositoryEvents.FETCHING_DATA_FAILED,
            )
        except Exception as e:
            logger.warning("Event dispatch failed", error=str(e))

    def _get_cached_features(self) -> FeatureSnapshot | None:
        cache = self._configuration.cache
        if cache is None:
            return None
        features = cache.get(CacheKey.FEATURES, _MISS)
        if features is _MISS or features is None:
            return None
        return features

    def _set_cache(self, features: FeatureSnapshot) -> None:
        cache = self._configuration.cache
        if cache is not None:
            cache.set(CacheKey.FEATURES, features, self._configuration.ttl)

    def _get_bootstrapped_response(self) -> tuple[str | None, BootstrapError | None]:
        """Return the bootstrap payload, or None with the read error if it failed."""
        try:
            raw = self._configuration.bootstrap_handler.get_bootstrap_contents(
                self._configuration.bootstrap_provider,
            )
        except BootstrapError as e:
            logger.warning("Reading bootstrap failed", code=e.code, error=str(e))
            return None, e
        return raw, None

    def _get_last_valid_state(self) -> str | None:
        stale_cache = self._configuration.get_stale_cache()
        if stale_cache is None:
            return None
        value = stale_cache.get(CacheKey.FEATURES_RESPONSE)
        return value if isinstance(value, str) else None

    def _set_last_valid_state(self, raw: str) -> None:
        stale_cache = self._configuration.get_stale_cache()
        if stale_cache is not None:
            stale_cache.set(CacheKey.FEATURES_RESPONSE, raw, self._configuration.stale_ttl)
