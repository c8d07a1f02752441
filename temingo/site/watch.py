"""Watch loop: rebuild the site whenever an input changes."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from watchfiles import DefaultFilter
from watchfiles import watch as _watch_paths

from ..core.models import BuildConfig, RebuildResult
from .rebuild import rebuild_output

logger = logging.getLogger(__name__)

POLL_STEP_MS = 100


def watched_paths(config: BuildConfig) -> list[Path]:
    """Paths observed for changes: input and partials trees plus each values file."""
    watched = [config.abs(config.input_dir), config.abs(config.partials_dir)]
    watched.extend(config.abs(path) for path in config.values_files)
    return watched


def watch_filter(config: BuildConfig) -> DefaultFilter:
    """Ignore the output directory and version-control metadata.

    The default ignored directories already include ``.git``.
    """
    return DefaultFilter(ignore_paths=[config.abs(config.output_dir)])


def watch_and_rebuild(
    config: BuildConfig,
    *,
    watch_fn: Callable[..., Iterable[set[tuple[Any, str]]]] = _watch_paths,
    stop_event: Optional[threading.Event] = None,
    rebuild: Callable[[BuildConfig], RebuildResult] = rebuild_output,
) -> int:
    """Build once, then rebuild on every batch of file changes.

    Rebuilds run synchronously on the calling thread, so they never overlap;
    changes made during a rebuild are delivered as the next batch. A failed
    rebuild is logged and the previous output is kept.

    Args:
        config: Build configuration
        watch_fn: Change iterator (``watchfiles.watch`` compatible)
        stop_event: Closes the loop when set
        rebuild: Rebuild cycle to run

    Returns:
        Number of rebuilds triggered by changes
    """
    logger.info("*** Starting to watch for file changes ... ***")
    paths = watched_paths(config)
    logger.debug("Watched paths/files:")
    for path in paths:
        logger.debug(str(path))

    rebuild(config)

    rebuilds = 0
    try:
        for changes in watch_fn(
            *paths,
            watch_filter=watch_filter(config),
            step=POLL_STEP_MS,
            stop_event=stop_event,
            raise_interrupt=False,
        ):
            if not changes:
                continue
            changed = sorted(path for _, path in changes)
            logger.info(f"*** Rebuilding because of a change in {changed[0]} ***")
            if len(changed) > 1:
                logger.debug(f"{len(changed) - 1} further change(s): {changed[1:]}")
            result = rebuild(config)
            if not result.ok:
                logger.error("*** Rebuild failed; keeping previous output, still watching ***")
            rebuilds += 1
    except KeyboardInterrupt:
        logger.info("*** Stopped watching ***")
    return rebuilds
