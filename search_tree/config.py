"""Configuration loading for the binary search tree demo driver."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 15
DEFAULT_MAX_VALUE = 100
DEFAULT_UNBALANCE_VALUES: Tuple[int, ...] = (101, 102, 103, 104, 105)


class DemoConfigError(ValueError):
    """Raised when a demo configuration file is malformed."""


@dataclass(frozen=True)
class DemoConfig:
    """Parameters controlling a demo run."""

    size: int = DEFAULT_SIZE
    max_value: int = DEFAULT_MAX_VALUE
    unbalance_values: Tuple[int, ...] = DEFAULT_UNBALANCE_VALUES
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not _is_int(self.size) or self.size < 0:
            raise DemoConfigError("size must be a non-negative integer")
        if not _is_int(self.max_value) or self.max_value <= 0:
            raise DemoConfigError("max_value must be a positive integer")
        if self.seed is not None and not _is_int(self.seed):
            raise DemoConfigError("seed must be an integer when provided")
        if not all(_is_int(value) for value in self.unbalance_values):
            raise DemoConfigError("unbalance_values must contain integers")

    def with_overrides(self, **overrides: Any) -> "DemoConfig":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_payload(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(text)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DemoConfigError(f"Invalid configuration file {path}: {exc}") from exc
    raise DemoConfigError(
        f"Unsupported configuration format '{suffix}'; use .json, .yaml or .yml"
    )


def config_from_mapping(payload: Mapping[str, Any]) -> DemoConfig:
    """Validate *payload* and convert it into a :class:`DemoConfig`."""

    if not isinstance(payload, Mapping):
        raise DemoConfigError("Configuration must be a mapping")
    known = {field.name for field in fields(DemoConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise DemoConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = dict(payload)
    if "unbalance_values" in values:
        raw = values["unbalance_values"]
        if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
            raise DemoConfigError("unbalance_values must be a list of integers")
        values["unbalance_values"] = tuple(raw)
    return DemoConfig(**values)


def load_demo_config(path: Optional[str | Path]) -> DemoConfig:
    """Load a demo configuration from JSON or YAML.

    ``None`` yields the defaults. An empty YAML document is treated as an
    empty mapping.
    """

    if path is None:
        return DemoConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    payload = _parse_payload(config_path)
    if payload is None:
        payload = {}
    config = config_from_mapping(payload)
    logger.debug("Loaded demo configuration from %s: %s", config_path, config)
    return config


__all__ = [
    "DEFAULT_MAX_VALUE",
    "DEFAULT_SIZE",
    "DEFAULT_UNBALANCE_VALUES",
    "DemoConfig",
    "DemoConfigError",
    "config_from_mapping",
    "load_demo_config",
]
