"""Template discovery over the input and partials trees."""

from __future__ import annotations

import logging
import os
import posixpath
from typing import Iterable

from ..core import paths
from ..core.errors import TemingoError
from ..core.models import BuildConfig, TemplateRecord
from .ignore import PathFilter

logger = logging.getLogger(__name__)


def discover(
    config: BuildConfig,
    path_filter: PathFilter,
    from_dir: str,
    extension: str,
    extra_exclusions: Iterable[str] = (),
    *,
    top: str | None = None,
) -> list[TemplateRecord]:
    """Collect every template below ``from_dir`` whose name ends with ``extension``.

    Walks depth-first in directory-listing order. Hidden entries and entries
    excluded by ``path_filter`` are skipped; excluded directories are not
    descended into.

    Args:
        config: Build configuration (provides the build root)
        path_filter: Exclusion rules for the current cycle
        from_dir: Root-relative (or absolute) directory to walk
        extension: File name suffix selecting templates
        extra_exclusions: Additional patterns excluded for this walk only
        top: Directory the walk started from; an absolute one is left out
            of URL-safety validation

    Returns:
        Discovered templates with root-relative paths

    Raises:
        PathValidationError: If a template path is not URL-safe
        TemingoError: If a directory or file cannot be read
    """
    extra = tuple(extra_exclusions)
    top = from_dir if top is None else top
    templates: list[TemplateRecord] = []

    try:
        entries = list(os.scandir(config.abs(from_dir)))
    except OSError as exc:
        raise TemingoError(f"Cannot list directory '{from_dir}': {exc}") from exc

    for entry in entries:
        if entry.name.startswith("."):
            continue
        entry_path = paths.join(from_dir, entry.name)
        is_dir = entry.is_dir()
        if path_filter.is_excluded(entry_path, extra, is_dir=is_dir):
            continue
        if is_dir:
            templates.extend(discover(config, path_filter, entry_path, extension, extra, top=top))
        elif entry.name.endswith(extension):
            url_path = paths.relative_to(entry_path, top) if posixpath.isabs(top) else entry_path
            paths.validate(url_path)
            try:
                text = config.abs(entry_path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise TemingoError(f"Cannot read template '{entry_path}': {exc}") from exc
            logger.debug(f"Discovered template '{entry_path}'")
            templates.append(TemplateRecord(relative_path=entry_path, text=text))

    return templates
