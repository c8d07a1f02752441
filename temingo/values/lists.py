"""List objects: directory-backed collections of items.

An item is an immediate subdirectory containing an ``index.yaml``. Its data
becomes a list object stamped with the item's site path under ``Path``.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from ..core import paths
from ..core.errors import ValuesFileError
from ..core.models import BuildConfig
from .store import deep_merge, load_yaml

logger = logging.getLogger(__name__)


def load_list_objects(config: BuildConfig, list_dir: str) -> dict[str, dict[str, Any]]:
    """Load every item below the site directory ``list_dir``.

    Args:
        config: Build configuration
        list_dir: Site path of the directory holding the items

    Returns:
        Mapping of item site path to its list object, in name order

    Raises:
        PathValidationError: If an item path is not URL-safe
        ValuesFileError: If the directory or an item file cannot be read
    """
    list_dir = paths.clean(list_dir)
    logger.debug(f"Loading list objects from '{list_dir}'")

    directory = config.abs(config.input_path(list_dir))
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as exc:
        raise ValuesFileError(f"Cannot list directory '{list_dir}': {exc}") from exc

    objects: dict[str, dict[str, Any]] = {}
    for entry in entries:
        if not entry.is_dir():
            continue
        index_path = os.path.join(entry.path, paths.INDEX_FILENAME)
        if not os.path.isfile(index_path):
            continue
        item_path = paths.join(list_dir, entry.name)
        paths.validate(item_path, "list object path")
        item = load_yaml(directory / entry.name / paths.INDEX_FILENAME)
        item["Path"] = "/" + item_path
        objects[item_path] = item
        logger.debug(f"Loaded list object '{item_path}'")

    return objects


class ListCache:
    """Resolved list views of one build cycle, keyed by list directory.

    Recording the same directory again merges into the existing entry.
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}

    def record(self, list_dir: str, objects: dict[str, Any]) -> None:
        key = paths.clean(list_dir)
        self._entries[key] = deep_merge(self._entries.get(key, {}), objects)

    def summary(self) -> dict[str, int]:
        return {key: len(value) for key, value in self._entries.items()}
