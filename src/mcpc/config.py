"""Client configuration — timeouts, settle delay, provider environment."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, Field, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_LINE_LIMIT = 16 * 1024 * 1024


class SettingsValidationError(Exception):
    """Raised when a settings YAML fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = Field(default=True, description="Print finished spans to stderr.")
    otlp_endpoint: str | None = None


class ClientSettings(BaseModel):
    """Knobs for talking to a provider process."""

    read_timeout: float = Field(
        default=30.0, gt=0, description="Max seconds to wait for one response line."
    )
    settle_delay: float = Field(
        default=0.1,
        ge=0,
        description="Pause between the discarded listing and the tool call.",
    )
    terminate_timeout: float = Field(
        default=5.0, gt=0, description="Grace period before a provider is killed."
    )
    line_limit: int = Field(
        default=DEFAULT_LINE_LIMIT, gt=0, description="Max bytes in one response line."
    )
    env: dict[str, str] = Field(
        default_factory=dict, description="Extra environment variables for the provider."
    )
    telemetry: TelemetrySettings | None = None

    def provider_env(self) -> dict[str, str] | None:
        """Environment for the child process, or ``None`` to inherit unchanged."""
        if not self.env:
            return None
        return {**os.environ, **self.env}


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`ClientSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ClientSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the defaults.

        Raises:
            SettingsValidationError: On read errors, YAML parse errors or
                schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsValidationError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsValidationError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsValidationError("Settings YAML must be a mapping")

        try:
            return ClientSettings.model_validate(data)
        except ValidationError as exc:
            raise SettingsValidationError(str(exc)) from exc
