"""Exception type unit tests."""

from unleash_repository import (
    ExhaustionError,
    PayloadError,
    RepositoryError,
    RepositoryErrorCodes,
    TransportError,
    UpstreamStatusError,
)


def test_str_includes_code() -> None:
    """str() renders CODE: message."""
    error = TransportError("connection refused")
    assert str(error) == "TRANSPORT_ERROR: connection refused"


def test_cause_is_chained() -> None:
    """The cause becomes __cause__."""
    cause = ValueError("bad")
    error = PayloadError("invalid", cause=cause)
    assert error.__cause__ is cause
    assert error.code == RepositoryErrorCodes.INVALID_PAYLOAD


def test_upstream_status_error() -> None:
    """UpstreamStatusError keeps the status code."""
    error = UpstreamStatusError(503)
    assert error.status_code == 503
    assert "503" in str(error)


def test_hierarchy() -> None:
    """All errors derive from RepositoryError."""
    assert isinstance(ExhaustionError("none"), RepositoryError)
    assert isinstance(UpstreamStatusError(500), RepositoryError)
