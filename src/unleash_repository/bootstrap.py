"""Bootstrap sources consulted when no live or cached payload is available."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .exceptions import BootstrapError, RepositoryErrorCodes

BootstrapContent = str | Mapping[str, Any] | None


class BootstrapProvider(ABC):
    """Source of raw bootstrap content."""

    @abstractmethod
    def get_bootstrap(self) -> BootstrapContent:
        """Return raw JSON text, a decoded mapping, or None."""
        ...


class BootstrapHandler(ABC):
    """Wraps a provider and yields the raw payload text the repository parses."""

    @abstractmethod
    def get_bootstrap_contents(self, provider: BootstrapProvider) -> str | None:
        ...


class EmptyBootstrapProvider(BootstrapProvider):
    """Provider used when no bootstrap is configured."""

    def get_bootstrap(self) -> BootstrapContent:
        return None


class JsonBootstrapProvider(BootstrapProvider):
    """Serves a fixed payload given as JSON text or as a mapping."""

    def __init__(self, data: str | Mapping[str, Any]) -> None:
        self._data = data

    def get_bootstrap(self) -> BootstrapContent:
        return self._data


class FileBootstrapProvider(BootstrapProvider):
    """Reads the payload from a JSON file on every call."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def get_bootstrap(self) -> BootstrapContent:
        try:
            return self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise BootstrapError(
                f"Failed to read bootstrap file: {self._path}",
                code=RepositoryErrorCodes.READ_FILE,
                cause=e,
            ) from e


class CompoundBootstrapProvider(BootstrapProvider):
    """Returns the first non-empty result of the wrapped providers."""

    def __init__(self, *providers: BootstrapProvider) -> None:
        self._providers = providers

    def get_bootstrap(self) -> BootstrapContent:
        for provider in self._providers:
            content = provider.get_bootstrap()
            if content:
                return content
        return None


class DefaultBootstrapHandler(BootstrapHandler):
    """Normalises provider output to JSON text."""

    def get_bootstrap_contents(self, provider: BootstrapProvider) -> str | None:
        content = provider.get_bootstrap()
        if content is None:
            return None
        if isinstance(content, (str, bytes)):
            text = content.decode("utf-8") if isinstance(content, bytes) else content
            return text if text.strip() else None
        try:
            return json.dumps(dict(content))
        except (TypeError, ValueError) as e:
            raise BootstrapError(
                f"Bootstrap content is not JSON serialisable: {e}",
                cause=e,
            ) from e
