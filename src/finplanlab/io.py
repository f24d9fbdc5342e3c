"""Utilities for loading projection documents from YAML/JSON sources."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from finplanlab.core.errors import ConfigError

__all__ = ["load_document"]


def load_document(source: str | Path, *, format: str | None = None) -> dict[str, Any]:
    """
    Read a mapping from a JSON or YAML file.

    The format follows the file suffix (``.json``, ``.yaml``, ``.yml``) unless
    ``format`` is given.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the format is unsupported, the text cannot be parsed, or
            the document root is not a mapping
    """
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    try:
        if fmt in {"yaml", "yml"}:
            data = yaml.safe_load(text)
        elif fmt == "json":
            data = json.loads(text)
        else:
            raise ConfigError(f"Unsupported document format '{fmt}' for {path}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Document root must be a mapping (source={path})")
    return data
