"""File read helpers for TaskFlow settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_text(path: Path) -> str:
    """Read a text file, returning empty string if missing."""
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML file, returning empty dict if missing or empty.

    A document that parses to something other than a mapping is an error.
    """
    text = read_text(path)
    if not text.strip():
        return {}
    result = yaml.safe_load(text)
    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(result).__name__}")
    return result
