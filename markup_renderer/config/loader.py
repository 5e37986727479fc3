"""Merge caller configuration over the built-in defaults."""
from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from markup_renderer.config.defaults import DEFAULTS
from markup_renderer.exceptions import ConfigurationError
from markup_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


def deep_merge(base: Mapping[str, Any], override: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a new mapping with ``override`` merged key by key over ``base``."""
    merged = deepcopy(dict(base))
    if not override:
        return merged
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def build_config(options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the defaults with ``options`` merged over them."""
    return deep_merge(DEFAULTS, options)


def load_config_file(path: Path) -> Dict[str, Any]:
    """Read a JSON configuration file."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {config_path} must contain a JSON object")
    LOGGER.debug("Loaded configuration from %s", config_path)
    return data
