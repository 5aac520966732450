"""Loading of the page-to-url side mapping."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pageindex.errors import ConfigError

LOGGER = logging.getLogger(__name__)


def load_url_map(path: Path) -> Mapping[str, str]:
    """Load a flat JSON object of ``"dir/file" -> url`` into a read-only mapping."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read url map {path}: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Url map {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Url map {path} must be a JSON object, got {type(data).__name__}")

    for key, value in data.items():
        if not isinstance(value, str):
            raise ConfigError(f"Url map {path}: value for {key!r} is not a string")

    LOGGER.info("Loaded %d urls from %s", len(data), path)
    return MappingProxyType(dict(data))
