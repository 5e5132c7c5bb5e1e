"""
Configuration.

Settings come from an optional YAML file, then environment variables
(a ``.env`` file is loaded first when present).
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from paxmanifest.core.errors import ConfigError
from paxmanifest.history.store import DEFAULT_MAX_DEPTH
from paxmanifest.io.export import EXPORT_FORMATS
from paxmanifest.pipelines.retry import RetryPolicy
from paxmanifest.recognition.gemini import DEFAULT_MODEL

# Environment variable -> config field
ENV_OVERRIDES = {
    "GEMINI_API_KEY": "api_key",
    "API_KEY": "api_key",
    "PAXMANIFEST_MODEL": "model_name",
    "PAXMANIFEST_LOG_LEVEL": "log_level",
    "PAXMANIFEST_HISTORY_DEPTH": "history_depth",
    "PAXMANIFEST_RETRY_ATTEMPTS": "retry_attempts",
}


@dataclass
class PaxConfig:
    """Runtime configuration."""

    # Recognition
    api_key: str | None = None
    model_name: str = DEFAULT_MODEL
    temperature: float = 0.0

    # History
    history_depth: int = DEFAULT_MAX_DEPTH

    # Retry
    retry_attempts: int = 1
    retry_initial_delay: float = 1.0

    # Export
    export_format: str = "xlsx"

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Coerce and validate values."""
        try:
            self.temperature = float(self.temperature)
            self.history_depth = int(self.history_depth)
            self.retry_attempts = int(self.retry_attempts)
            self.retry_initial_delay = float(self.retry_initial_delay)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        if self.history_depth < 1:
            raise ConfigError(f"history_depth must be >= 1, got {self.history_depth}")
        if self.retry_attempts < 1:
            raise ConfigError(f"retry_attempts must be >= 1, got {self.retry_attempts}")
        if self.export_format not in EXPORT_FORMATS:
            raise ConfigError(
                f"export_format must be one of {sorted(EXPORT_FORMATS)}, got {self.export_format!r}"
            )
        self.log_level = str(self.log_level).upper()

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.retry_attempts,
            initial_delay_seconds=self.retry_initial_delay,
        )

    def to_dict(self, redact: bool = True) -> dict[str, Any]:
        """Settings as a dict, with the API key masked by default."""
        data = asdict(self)
        if redact and data.get("api_key"):
            data["api_key"] = "***"
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaxConfig:
        """
        Create from a dict, rejecting unknown keys.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {unknown}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> PaxConfig:
        """
        Load settings from a YAML file.

        Raises:
            ConfigError: If the file is missing or malformed.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            with path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping")

        return cls.from_dict(data)


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> PaxConfig:
    """
    Resolve configuration from file and environment.

    Environment values override file values. When ``environ`` is None the
    process environment is used, after loading a ``.env`` file.

    Args:
        path: Optional YAML config file.
        environ: Optional environment mapping.

    Returns:
        Resolved PaxConfig.
    """
    if environ is None:
        load_dotenv()
        environ = dict(os.environ)

    data = PaxConfig.from_yaml(path).to_dict(redact=False) if path else {}

    # First variable listed for a field wins (GEMINI_API_KEY over API_KEY)
    applied: set[str] = set()
    for env_name, field_name in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value and field_name not in applied:
            data[field_name] = value
            applied.add(field_name)

    return PaxConfig.from_dict(data)
