"""Bootstrap provider and handler unit tests."""

import json
from pathlib import Path

import pytest
from unleash_repository import (
    BootstrapError,
    CompoundBootstrapProvider,
    DefaultBootstrapHandler,
    EmptyBootstrapProvider,
    FileBootstrapProvider,
    JsonBootstrapProvider,
    RepositoryErrorCodes,
)

PAYLOAD = {"features": [{"name": "a", "enabled": True, "strategies": []}]}


def test_empty_provider() -> None:
    """The empty provider yields no content."""
    assert DefaultBootstrapHandler().get_bootstrap_contents(EmptyBootstrapProvider()) is None


def test_json_provider_with_text() -> None:
    """JSON text is passed through unchanged."""
    text = json.dumps(PAYLOAD)
    assert DefaultBootstrapHandler().get_bootstrap_contents(JsonBootstrapProvider(text)) == text


def test_json_provider_with_mapping() -> None:
    """A mapping is serialised to JSON text."""
    contents = DefaultBootstrapHandler().get_bootstrap_contents(JsonBootstrapProvider(PAYLOAD))
    assert contents is not None
    assert json.loads(contents) == PAYLOAD


def test_blank_text_is_no_content() -> None:
    """Whitespace-only text counts as absent."""
    assert DefaultBootstrapHandler().get_bootstrap_contents(JsonBootstrapProvider("  ")) is None


def test_unserialisable_mapping() -> None:
    """A mapping that cannot be serialised raises BootstrapError."""
    provider = JsonBootstrapProvider({"features": object()})
    with pytest.raises(BootstrapError):
        DefaultBootstrapHandler().get_bootstrap_contents(provider)


def test_file_provider(tmp_path: Path) -> None:
    """The file provider reads the file contents."""
    path = tmp_path / "bootstrap.json"
    path.write_text(json.dumps(PAYLOAD), encoding="utf-8")
    contents = DefaultBootstrapHandler().get_bootstrap_contents(FileBootstrapProvider(path))
    assert contents is not None
    assert json.loads(contents) == PAYLOAD


def test_file_provider_missing_file(tmp_path: Path) -> None:
    """A missing file raises BootstrapError(READ_FILE_ERROR)."""
    provider = FileBootstrapProvider(tmp_path / "missing.json")
    with pytest.raises(BootstrapError) as exc_info:
        provider.get_bootstrap()
    assert exc_info.value.code == RepositoryErrorCodes.READ_FILE


def test_compound_provider_first_non_empty() -> None:
    """The compound provider returns the first non-empty content."""
    provider = CompoundBootstrapProvider(
        EmptyBootstrapProvider(),
        JsonBootstrapProvider(PAYLOAD),
        JsonBootstrapProvider({"features": []}),
    )
    assert provider.get_bootstrap() == PAYLOAD


def test_compound_provider_all_empty() -> None:
    """All-empty providers yield None."""
    provider = CompoundBootstrapProvider(EmptyBootstrapProvider(), EmptyBootstrapProvider())
    assert provider.get_bootstrap() is None
