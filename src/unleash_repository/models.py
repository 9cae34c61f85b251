"""Feature toggle data model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


class Stickiness:
    """Well-known stickiness identifiers.

    Any context field name is a valid stickiness; these are the ones the
    upstream service ships by default.
    """

    DEFAULT: str = "default"
    RANDOM: str = "random"
    USER_ID: str = "userId"
    SESSION_ID: str = "sessionId"


@dataclass(frozen=True)
class Constraint:
    """A single context attribute match rule."""

    context_name: str
    operator: str
    values: tuple[str, ...] | None = None
    value: str | None = None
    inverted: bool = False
    case_insensitive: bool = False


@dataclass(frozen=True)
class Segment:
    """Reusable set of constraints referenced by id from strategies."""

    id: int
    constraints: tuple[Constraint, ...] = ()


@dataclass(frozen=True)
class VariantPayload:
    """Typed payload attached to a variant."""

    type: str
    value: str


@dataclass(frozen=True)
class VariantOverride:
    """Forces a variant for the listed context values."""

    context_name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Variant:
    """Weighted alternative a feature can resolve to."""

    name: str
    weight: int
    stickiness: str = Stickiness.DEFAULT
    payload: VariantPayload | None = None
    overrides: tuple[VariantOverride, ...] = ()


@dataclass(frozen=True)
class Strategy:
    """Activation strategy of a feature.

    ``has_missing_segments`` is set when at least one referenced segment id
    was absent from the segment table; such a strategy must never match.
    """

    name: str
    parameters: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    constraints: tuple[Constraint, ...] = ()
    segments: tuple[Segment, ...] = ()
    has_missing_segments: bool = False
    variants: tuple[Variant, ...] = ()


@dataclass(frozen=True)
class Feature:
    """Named toggle with its strategies and variants."""

    name: str
    enabled: bool
    strategies: tuple[Strategy, ...] = ()
    variants: tuple[Variant, ...] = ()
    impression_data: bool = False


# Read-only mapping of feature name to Feature, produced by one parse call.
FeatureSnapshot = Mapping[str, Feature]
