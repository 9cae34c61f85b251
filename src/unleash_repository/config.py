"""Repository configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import httpx

from .bootstrap import (
    BootstrapHandler,
    BootstrapProvider,
    DefaultBootstrapHandler,
    EmptyBootstrapProvider,
)
from .cache import CacheInterface
from .events import EventDispatcher, InMemoryEventDispatcher
from .exceptions import ConfigurationError

CLIENT_SPEC_VERSION = "4.3.2"
DEFAULT_TTL = 30
DEFAULT_STALE_TTL = 30 * 60


@dataclass(frozen=True)
class UnleashConfiguration:
    """Immutable set of collaborators and settings of a repository.

    A cache is mandatory while fetching is enabled. With fetching disabled
    the repository serves bootstrap data only and the cache is optional.
    """

    url: str
    app_name: str
    instance_id: str
    cache: CacheInterface | None = None
    stale_cache: CacheInterface | None = None
    ttl: int = DEFAULT_TTL
    stale_ttl: int = DEFAULT_STALE_TTL
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    bootstrap_handler: BootstrapHandler = field(default_factory=DefaultBootstrapHandler)
    bootstrap_provider: BootstrapProvider = field(default_factory=EmptyBootstrapProvider)
    fetching_enabled: bool = True
    event_dispatcher: EventDispatcher = field(default_factory=InMemoryEventDispatcher)
    timeout_seconds: float = 10.0
    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if self.ttl < 0 or self.stale_ttl < 0:
            raise ConfigurationError("ttl and stale_ttl must be >= 0")
        if self.fetching_enabled:
            if self.cache is None:
                raise ConfigurationError("Cache handler is not set")
            if not self.url:
                raise ConfigurationError("url must be set when fetching is enabled")
            if not self.app_name:
                raise ConfigurationError("app_name must be set when fetching is enabled")

    @property
    def features_url(self) -> str:
        url = self.url if self.url.endswith("/") else self.url + "/"
        return url + "client/features"

    def get_stale_cache(self) -> CacheInterface | None:
        """Stale cache region; shares the fresh cache when none is set."""
        return self.stale_cache if self.stale_cache is not None else self.cache

    def request_headers(self) -> dict[str, str]:
        headers = {
            "UNLEASH-APPNAME": self.app_name,
            "UNLEASH-INSTANCEID": self.instance_id,
            "Unleash-Client-Spec": CLIENT_SPEC_VERSION,
        }
        headers.update(self.headers)
        return headers


class UnleashConfigurationBuilder:
    """Builder for UnleashConfiguration."""

    def __init__(self) -> None:
        self._url = ""
        self._app_name = ""
        self._instance_id = ""
        self._cache: CacheInterface | None = None
        self._stale_cache: CacheInterface | None = None
        self._ttl = DEFAULT_TTL
        self._stale_ttl = DEFAULT_STALE_TTL
        self._headers: dict[str, str] = {}
        self._bootstrap_handler: BootstrapHandler = DefaultBootstrapHandler()
        self._bootstrap_provider: BootstrapProvider = EmptyBootstrapProvider()
        self._fetching_enabled = True
        self._event_dispatcher: EventDispatcher = InMemoryEventDispatcher()
        self._timeout_seconds = 10.0
        self._transport: httpx.BaseTransport | None = None

    def with_url(self, url: str) -> UnleashConfigurationBuilder:
        self._url = url
        return self

    def with_app_name(self, app_name: str) -> UnleashConfigurationBuilder:
        self._app_name = app_name
        return self

    def with_instance_id(self, instance_id: str) -> UnleashConfigurationBuilder:
        self._instance_id = instance_id
        return self

    def with_cache(self, cache: CacheInterface) -> UnleashConfigurationBuilder:
        self._cache = cache
        return self

    def with_stale_cache(self, cache: CacheInterface) -> UnleashConfigurationBuilder:
        self._stale_cache = cache
        return self

    def with_ttl(self, ttl: int) -> UnleashConfigurationBuilder:
        self._ttl = ttl
        return self

    def with_stale_ttl(self, stale_ttl: int) -> UnleashConfigurationBuilder:
        self._stale_ttl = stale_ttl
        return self

    def with_header(self, name: str, value: str) -> UnleashConfigurationBuilder:
        self._headers[name] = value
        return self

    def with_headers(self, headers: Mapping[str, str]) -> UnleashConfigurationBuilder:
        self._headers = dict(headers)
        return self

    def with_bootstrap_handler(self, handler: BootstrapHandler) -> UnleashConfigurationBuilder:
        self._bootstrap_handler = handler
        return self

    def with_bootstrap_provider(self, provider: BootstrapProvider) -> UnleashConfigurationBuilder:
        self._bootstrap_provider = provider
        return self

    def with_fetching_enabled(self, enabled: bool) -> UnleashConfigurationBuilder:
        self._fetching_enabled = enabled
        return self

    def with_event_dispatcher(self, dispatcher: EventDispatcher) -> UnleashConfigurationBuilder:
        self._event_dispatcher = dispatcher
        return self

    def with_timeout(self, seconds: float) -> UnleashConfigurationBuilder:
        self._timeout_seconds = seconds
        return self

    def with_transport(self, transport: httpx.BaseTransport) -> UnleashConfigurationBuilder:
        self._transport = transport
        return self

    def build(self) -> UnleashConfiguration:
        """Build the configuration.

        Raises:
            ConfigurationError: a required collaborator is missing
        """
        return UnleashConfiguration(
            url=self._url,
            app_name=self._app_name,
            instance_id=self._instance_id,
            cache=self._cache,
            stale_cache=self._stale_cache,
            ttl=self._ttl,
            stale_ttl=self._stale_ttl,
            headers=self._headers,
            bootstrap_handler=self._bootstrap_handler,
            bootstrap_provider=self._bootstrap_provider,
            fetching_enabled=self._fetching_enabled,
            event_dispatcher=self._event_dispatcher,
            timeout_seconds=self._timeout_seconds,
            transport=self._transport,
        )
