"""UnleashConfiguration and builder unit tests."""

import dataclasses

import pytest
from unleash_repository import (
    ConfigurationError,
    InMemoryCache,
    UnleashConfiguration,
    UnleashConfigurationBuilder,
)


def make_builder() -> UnleashConfigurationBuilder:
    return (
        UnleashConfigurationBuilder()
        .with_url("http://unleash:4242/api")
        .with_app_name("app")
        .with_instance_id("instance")
        .with_cache(InMemoryCache())
    )


def test_builder_defaults() -> None:
    """Defaults match the documented TTLs."""
    config = make_builder().build()
    assert config.ttl == 30
    assert config.stale_ttl == 1800
    assert config.fetching_enabled is True
    assert config.headers == {}


def test_features_url() -> None:
    """The features endpoint is appended to the base URL."""
    assert make_builder().build().features_url == "http://unleash:4242/api/client/features"
    config = make_builder().with_url("http://unleash:4242/api/").build()
    assert config.features_url == "http://unleash:4242/api/client/features"


def test_request_headers() -> None:
    """Custom headers are merged after the identifying headers."""
    config = make_builder().with_headers({"Authorization": "token"}).build()
    headers = config.request_headers()
    assert headers["UNLEASH-APPNAME"] == "app"
    assert headers["UNLEASH-INSTANCEID"] == "instance"
    assert headers["Unleash-Client-Spec"] == "4.3.2"
    assert headers["Authorization"] == "token"


def test_stale_cache_defaults_to_cache() -> None:
    """Without a stale cache the fresh cache is shared."""
    cache = InMemoryCache()
    config = make_builder().with_cache(cache).build()
    assert config.get_stale_cache() is cache
    stale = InMemoryCache()
    config = make_builder().with_stale_cache(stale).build()
    assert config.get_stale_cache() is stale


def test_missing_cache_fails_fast() -> None:
    """Fetching without a cache is rejected at construction."""
    with pytest.raises(ConfigurationError, match="Cache"):
        UnleashConfiguration(url="http://unleash", app_name="app", instance_id="i")


def test_bootstrap_only_without_cache() -> None:
    """Bootstrap-only mode does not require a cache or URL."""
    config = UnleashConfigurationBuilder().with_fetching_enabled(False).build()
    assert config.cache is None
    assert config.get_stale_cache() is None


def test_missing_url_fails_fast() -> None:
    """Fetching requires a URL."""
    with pytest.raises(ConfigurationError, match="url"):
        make_builder().with_url("").build()


def test_negative_ttl_rejected() -> None:
    """Negative TTLs are rejected."""
    with pytest.raises(ConfigurationError):
        make_builder().with_ttl(-1).build()


def test_configuration_is_immutable() -> None:
    """Configuration fields and headers cannot be changed."""
    config = make_builder().with_header("X-Test", "1").build()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.ttl = 5  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.headers["X-Test"] = "2"  # type: ignore[index]
