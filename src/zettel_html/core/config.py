"""Render configuration dataclass.

Values come from (lowest to highest priority) the dataclass defaults, an
optional YAML/JSON config file, ``ZETTEL_HTML_*`` environment variables and
finally explicit CLI flags.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

_logger = logging.getLogger(__name__)

INPUT_FORMATS = ("sexpr", "zjson")

ENV_PREFIX = "ZETTEL_HTML_"
_ENV_KEYS = ("heading_offset", "unique_prefix", "emit_footnotes", "suppress_links")


class ConfigError(ValueError):
    """Raised when a config file or override holds an invalid value."""


@dataclass(frozen=True)
class RenderConfig:
    """Immutable render options of one render call."""

    heading_offset: int = 0
    unique_prefix: str = ""
    emit_footnotes: bool = True
    suppress_links: bool = False
    input_format: str = "sexpr"   # sexpr | zjson

    def __post_init__(self) -> None:
        if self.input_format not in INPUT_FORMATS:
            raise ConfigError(f"input_format must be one of {INPUT_FORMATS}, got {self.input_format!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RenderConfig:
        """Build a config from a mapping; unknown keys are ignored."""
        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            f = known.get(key)
            if f is None:
                _logger.debug("ignoring unknown config key %r", key)
                continue
            kwargs[key] = _coerce(key, f.default, value)
        return cls(**kwargs)

    def with_env(self, environ: Mapping[str, str] | None = None) -> RenderConfig:
        """Return a copy with ``ZETTEL_HTML_*`` environment overrides applied."""
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for key in _ENV_KEYS:
            raw = environ.get(ENV_PREFIX + key.upper())
            if raw is not None:
                overrides[key] = _coerce(key, getattr(self, key), raw)
        return replace(self, **overrides) if overrides else self


def _coerce(key: str, default: Any, value: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        raise ConfigError(f"{key}: expected a boolean, got {value!r}")
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{key}: expected an integer, got {value!r}") from exc
    if value is None:
        return ""
    return str(value)


def load_config(path: Path | None = None, *, use_env: bool = True) -> RenderConfig:
    """Load a config file (``.json`` or YAML) and apply environment overrides."""
    data: Mapping[str, Any] = {}
    if path is not None:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text) or {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"{path}: config must be a mapping")
    cfg = RenderConfig.from_mapping(data)
    return cfg.with_env() if use_env else cfg
