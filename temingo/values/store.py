"""Values files: loading, deep merging and per-render views."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import yaml

from ..core.errors import ValuesFileError

logger = logging.getLogger(__name__)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file whose top level is a mapping.

    Args:
        path: YAML file to read

    Returns:
        Parsed mapping (empty for an empty file)

    Raises:
        ValuesFileError: If the file is unreadable, malformed or not a mapping
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ValuesFileError(f"Cannot read {path}: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValuesFileError(f"Malformed YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValuesFileError(
            f"Expected a mapping at the top level of {path}, got {type(data).__name__}"
        )
    return data


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge mappings without mutating inputs.

    Nested mappings merge key-wise; any other value in ``override``
    replaces the value in ``base`` wholesale.

    Example:
        >>> deep_merge({"a": {"x": 1}}, {"a": {"y": 2}})
        {'a': {'x': 1, 'y': 2}}
        >>> deep_merge({"a": 1}, {"a": 2})
        {'a': 2}
    """
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def load_merged(paths: Iterable[Path]) -> dict[str, Any]:
    """Load values files and deep-merge them, later files overriding earlier ones."""
    merged: dict[str, Any] = {}
    for path in paths:
        logger.debug(f"Reading values file {path}")
        merged = deep_merge(merged, load_yaml(path))
    return merged


def freeze(values: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only view used as the shared base of a build cycle."""
    return MappingProxyType(dict(values))


def derive(base: Mapping[str, Any], **overlay: Any) -> dict[str, Any]:
    """Return a private shallow copy of ``base`` extended with ``overlay``."""
    view = dict(base)
    view.update(overlay)
    return view


def dump_values(values: Mapping[str, Any]) -> str:
    """Render values as YAML for debug output."""
    return yaml.safe_dump(dict(values), default_flow_style=False, sort_keys=False)
