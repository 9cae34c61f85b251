"""Feature payload parser.

Turns the raw ``client/features`` response into the immutable model in
:mod:`unleash_repository.models`. The parse runs in two passes: the global
segment table is built completely before any strategy resolves its segment
references against it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .exceptions import PayloadError, RepositoryErrorCodes
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

_MISSING = object()


def decode_payload(raw: str | bytes) -> dict[str, Any]:
    """Decode a raw JSON payload into a dict.

    Raises:
        PayloadError: the payload is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(raw)
    except (ValueError, TypeError) as e:
        raise PayloadError(
            f"JsonException: '{e}'",
            code=RepositoryErrorCodes.INVALID_JSON,
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise PayloadError(
            f"Expected a JSON object at the top level, got {type(data).__name__}",
            code=RepositoryErrorCodes.INVALID_JSON,
        )
    return data


def parse_payload(raw: str | bytes) -> FeatureSnapshot:
    """Decode and parse a raw payload in one step."""
    return parse_features(decode_payload(raw))


def parse_features(body: Mapping[str, Any]) -> FeatureSnapshot:
    """Parse a decoded payload into a snapshot keyed by feature name.

    Duplicate feature names keep the last occurrence.

    Raises:
        PayloadError: ``features`` is missing or any entry is malformed
    """
    features_raw = body.get("features")
    if not isinstance(features_raw, list):
        raise PayloadError(
            "The body isn't valid because it doesn't contain a 'features' key",
            code=RepositoryErrorCodes.MISSING_FEATURES,
        )

    segments = parse_segments(_optional(body, "segments", "body", list, []))

    features: dict[str, Feature] = {}
    for index, feature_raw in enumerate(features_raw):
        feature = _parse_feature(feature_raw, segments, f"features[{index}]")
        features[feature.name] = feature
    return MappingProxyType(features)


def parse_segments(segments_raw: list[Any]) -> dict[int, Segment]:
    """Build the global segment table (id -> Segment)."""
    table: dict[int, Segment] = {}
    for index, segment_raw in enumerate(segments_raw):
        path = f"segments[{index}]"
        segment_id = _segment_id(_required(segment_raw, "id", path, (int, str)), f"{path}.id")
        constraints = parse_constraints(
            _optional(segment_raw, "constraints", path, list, []), f"{path}.constraints"
        )
        table[segment_id] = Segment(id=segment_id, constraints=constraints)
    return table


def parse_constraints(constraints_raw: list[Any], path: str) -> tuple[Constraint, ...]:
    constraints = []
    for index, raw in enumerate(constraints_raw):
        item = f"{path}[{index}]"
        values = _optional(raw, "values", item, list, None)
        constraints.append(
            Constraint(
                context_name=_required(raw, "contextName", item, str),
                operator=_required(raw, "operator", item, str),
                values=tuple(values) if values is not None else None,
                value=_optional(raw, "value", item, str, None),
                inverted=_optional(raw, "inverted", item, bool, False),
                case_insensitive=_optional(raw, "caseInsensitive", item, bool, False),
            )
        )
    return tuple(constraints)


def parse_variants(variants_raw: list[Any], path: str) -> tuple[Variant, ...]:
    """Parse variants, defaulting stickiness once here."""
    variants = []
    for index, raw in enumerate(variants_raw):
        item = f"{path}[{index}]"
        payload_raw = _optional(raw, "payload", item, dict, None)
        payload = None
        if payload_raw is not None:
            payload = VariantPayload(
                type=_required(payload_raw, "type", f"{item}.payload", str),
                value=_required(payload_raw, "value", f"{item}.payload", str),
            )
        overrides = []
        for o_index, override_raw in enumerate(_optional(raw, "overrides", item, list, [])):
            o_path = f"{item}.overrides[{o_index}]"
            overrides.append(
                VariantOverride(
                    context_name=_required(override_raw, "contextName", o_path, str),
                    values=tuple(_required(override_raw, "values", o_path, list)),
                )
            )
        weight = _required(raw, "weight", item, int)
        if isinstance(weight, bool) or weight < 0:
            raise PayloadError(f"{item}.weight: expected a non-negative integer, got {weight!r}")
        variants.append(
            Variant(
                name=_required(raw, "name", item, str),
                weight=weight,
                stickiness=_optional(raw, "stickiness", item, str, Stickiness.DEFAULT),
                payload=payload,
                overrides=tuple(overrides),
            )
        )
    return tuple(variants)


def _parse_feature(raw: Any, segments: Mapping[int, Segment], path: str) -> Feature:
    strategies = tuple(
        _parse_strategy(strategy_raw, segments, f"{path}.strategies[{index}]")
        for index, strategy_raw in enumerate(_optional(raw, "strategies", path, list, []))
    )
    return Feature(
        name=_required(raw, "name", path, str),
        enabled=_required(raw, "enabled", path, bool),
        strategies=strategies,
        variants=parse_variants(_optional(raw, "variants", path, list, []), f"{path}.variants"),
        impression_data=_optional(raw, "impressionData", path, bool, False),
    )


def _parse_strategy(raw: Any, segments: Mapping[int, Segment], path: str) -> Strategy:
    constraints = parse_constraints(
        _optional(raw, "constraints", path, list, []), f"{path}.constraints"
    )
    variants = parse_variants(_optional(raw, "variants", path, list, []), f"{path}.variants")

    resolved: list[Segment] = []
    has_missing_segments = False
    for index, ref in enumerate(_optional(raw, "segments", path, list, [])):
        segment = segments.get(_segment_id(ref, f"{path}.segments[{index}]"))
        if segment is None:
            has_missing_segments = True
        else:
            resolved.append(segment)

    parameters = _optional(raw, "parameters", path, dict, {})
    return Strategy(
        name=_required(raw, "name", path, str),
        parameters=MappingProxyType({str(k): str(v) for k, v in parameters.items()}),
        constraints=constraints,
        segments=tuple(resolved),
        has_missing_segments=has_missing_segments,
        variants=variants,
    )


def _segment_id(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise PayloadError(f"{path}: expected a segment id, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise PayloadError(f"{path}: expected a segment id, got {value!r}", cause=e) from e


def _required(raw: Any, key: str, path: str, expected: type | tuple[type, ...]) -> Any:
    value = _lookup(raw, key, path)
    if value is _MISSING or value is None:
        raise PayloadError(f"{path}: missing required field '{key}'")
    _check_type(value, key, path, expected)
    return value


def _optional(raw: Any, key: str, path: str, expected: type | tuple[type, ...], default: Any) -> Any:
    value = _lookup(raw, key, path)
    if value is _MISSING or value is None:
        return default
    _check_type(value, key, path, expected)
    return value


def _lookup(raw: Any, key: str, path: str) -> Any:
    if not isinstance(raw, Mapping):
        raise PayloadError(f"{path}: expected an object, got {type(raw).__name__}")
    return raw.get(key, _MISSING)


def _check_type(value: Any, key: str, path: str, expected: type | tuple[type, ...]) -> None:
    if not isinstance(value, expected):
        raise PayloadError(
            f"{path}.{key}: unexpected type {type(value).__name__}"
        )
