"""YAML settings for building a repository configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from .bootstrap import FileBootstrapProvider
from .config import DEFAULT_STALE_TTL, DEFAULT_TTL, UnleashConfigurationBuilder
from .exceptions import ConfigurationError, RepositoryErrorCodes
from .logger import new_logger


class LogSettings(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class RepositorySettings(BaseModel):
    """Plain settings of a repository; collaborators are attached in code."""

    url: str = ""
    app_name: str = ""
    instance_id: str = ""
    ttl: int = Field(default=DEFAULT_TTL, ge=0)
    stale_ttl: int = Field(default=DEFAULT_STALE_TTL, ge=0)
    headers: dict[str, str] = Field(default_factory=dict)
    fetching_enabled: bool = True
    timeout_seconds: float = Field(default=10.0, gt=0)
    bootstrap_file: str | None = None
    log: LogSettings = Field(default_factory=LogSettings)

    def to_builder(self) -> UnleashConfigurationBuilder:
        """Return a builder seeded with these settings."""
        builder = (
            UnleashConfigurationBuilder()
            .with_url(self.url)
            .with_app_name(self.app_name)
            .with_instance_id(self.instance_id)
            .with_ttl(self.ttl)
            .with_stale_ttl(self.stale_ttl)
            .with_headers(self.headers)
            .with_fetching_enabled(self.fetching_enabled)
            .with_timeout(self.timeout_seconds)
        )
        if self.bootstrap_file:
            builder.with_bootstrap_provider(FileBootstrapProvider(self.bootstrap_file))
        return builder

    def configure_logging(self) -> structlog.stdlib.BoundLogger:
        """Apply the log section and return a logger bound to this client."""
        context = {"app_name": self.app_name}
        if self.instance_id:
            context["instance_id"] = self.instance_id
        return new_logger(self.log.level, self.log.format, **context)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read settings file: {path}",
            code=RepositoryErrorCodes.READ_FILE,
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML: {path}",
            code=RepositoryErrorCodes.PARSE_YAML,
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file must contain a mapping: {path}",
            code=RepositoryErrorCodes.PARSE_YAML,
        )
    return data


def load_settings(path: Path | str, section: str | None = "unleash") -> RepositorySettings:
    """Load RepositorySettings from a YAML file.

    section: top-level key holding the settings; None reads the whole document.
    """
    data = _read_yaml(Path(path))
    if section is not None:
        data = data.get(section) or {}
    try:
        return RepositorySettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Settings validation failed: {e}",
            code=RepositoryErrorCodes.VALIDATION,
            cause=e,
        ) from e
