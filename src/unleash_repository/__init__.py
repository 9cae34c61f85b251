"""Feature toggle repository with layered cache and bootstrap fallbacks."""

from .bootstrap import (
    BootstrapHandler,
    BootstrapProvider,
    CompoundBootstrapProvider,
    DefaultBootstrapHandler,
    EmptyBootstrapProvider,
    FileBootstrapProvider,
    JsonBootstrapProvider,
)
from .cache import CacheInterface, CacheKey
from .config import UnleashConfiguration, UnleashConfigurationBuilder
from .events import (
    EventDispatcher,
    FetchingDataFailedEvent,
    InMemoryEventDispatcher,
    RepositoryEvents,
)
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
from .logger import new_logger
from .memory import InMemoryCache
from .models import (
    Constraint,
    Feature,
    FeatureSnapshot,
    Segment,
    Stickiness,
    Strategy,
    Variant,
    VariantOverride,
    VariantPayload,
)
from .outcome import FetchOutcome, FetchResult
from .parser import decode_payload, parse_features, parse_payload
from .repository import DefaultUnleashRepository, UnleashRepository
from .settings import RepositorySettings, load_settings

__all__ = [
    "BootstrapError",
    "BootstrapHandler",
    "BootstrapProvider",
    "CacheInterface",
    "CacheKey",
    "CompoundBootstrapProvider",
    "ConfigurationError",
    "Constraint",
    "DefaultBootstrapHandler",
    "DefaultUnleashRepository",
    "EmptyBootstrapProvider",
    "EventDispatcher",
    "ExhaustionError",
    "Feature",
    "FeatureSnapshot",
    "FetchOutcome",
    "FetchResult",
    "FetchingDataFailedEvent",
    "FileBootstrapProvider",
    "InMemoryCache",
    "InMemoryEventDispatcher",
    "JsonBootstrapProvider",
    "PayloadError",
    "RepositoryError",
    "RepositoryErrorCodes",
    "RepositoryEvents",
    "RepositorySettings",
    "Segment",
    "Stickiness",
    "Strategy",
    "TransportError",
    "UnleashConfiguration",
    "UnleashConfigurationBuilder",
    "UnleashRepository",
    "UpstreamStatusError",
    "Variant",
    "VariantOverride",
    "VariantPayload",
    "decode_payload",
    "load_settings",
    "new_logger",
    "parse_features",
    "parse_payload",
]
