"""Exclusion rules for discovery and copying.

A path is excluded when any pattern source matches it: the persistent
ignore file, the internal rules (ignore file itself, output and static
directories) or the patterns supplied by the caller. Sources are matched
independently so a negation in one source never re-includes a path that
another source excludes.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from pathspec import GitIgnoreSpec

from ..core import paths
from ..core.errors import IgnoreFileError
from ..core.models import BuildConfig

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def compile_patterns(patterns: tuple[str, ...]) -> GitIgnoreSpec:
    """Compile gitignore-style patterns (``**`` matches any depth)."""
    return GitIgnoreSpec.from_lines(patterns)


def read_ignore_file(path: Path) -> list[str]:
    """Read the pattern lines of an ignore file.

    Raises:
        IgnoreFileError: If the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise IgnoreFileError(f"Cannot read ignore file {path}: {exc}") from exc


class PathFilter:
    """Decides whether a root-relative path is excluded.

    The ignore file is read once at construction; a new filter is built for
    every rebuild cycle.
    """

    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self.ignore_patterns = tuple(read_ignore_file(config.abs(config.ignore_file)))
        self.internal_patterns = (
            anchored_pattern(config.ignore_file),
            anchored_pattern(config.output_dir),
            anchored_pattern(config.output_dir, "**"),
            anchored_pattern(config.static_dir),
            anchored_pattern(config.static_dir, "**"),
        )
        self._ignore_spec = compile_patterns(self.ignore_patterns)
        self._internal_spec = compile_patterns(self.internal_patterns)

    def is_excluded_by_ignore_file(
        self, path: str, extra_patterns: Iterable[str] = (), is_dir: bool = False
    ) -> bool:
        """Match ``path`` against the ignore file and ``extra_patterns`` only."""
        candidates = _candidates(path, is_dir)
        if any(self._ignore_spec.match_file(candidate) for candidate in candidates):
            logger.debug(
                f"Exclusion triggered at '/{candidates[0]}', specified in '{self.config.ignore_file}'."
            )
            return True
        for pattern in extra_patterns:
            # Each caller pattern is its own source, so later ones cannot negate earlier ones.
            spec = compile_patterns((pattern,))
            if any(spec.match_file(candidate) for candidate in candidates):
                logger.debug(f"Exclusion triggered at '/{candidates[0]}', specified by caller.")
                return True
        return False

    def is_excluded(
        self, path: str, extra_patterns: Iterable[str] = (), is_dir: bool = False
    ) -> bool:
        """Match ``path`` against every pattern source.

        Directory-only patterns (``name/``) match when ``is_dir`` is set.
        """
        extra = tuple(extra_patterns)
        if self.is_excluded_by_ignore_file(path, extra, is_dir):
            return True
        candidates = _candidates(path, is_dir)
        if any(self._internal_spec.match_file(candidate) for candidate in candidates):
            logger.debug(f"Exclusion triggered at '/{candidates[0]}', specified internally.")
            return True
        return False


def _candidates(path: str, is_dir: bool) -> tuple[str, ...]:
    path = paths.clean(path)
    return (path, path + "/") if is_dir else (path,)


def anchored_pattern(path: str, *suffix: str) -> str:
    """Pattern matching ``path`` (joined with ``suffix``) from the build root only.

    Absolute paths are matched without their leading slash, like candidates.
    """
    return "/" + paths.join(path.lstrip("/"), *suffix)
