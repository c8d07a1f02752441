"""Rebuild cycle: copy static and pass-through files, then render.

A cycle is staged in a temporary directory and only replaces the contents
of the output directory once it has completed, so a failing cycle leaves
the previous output in place.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable

from ..core import paths
from ..core.errors import TemingoError
from ..core.models import BuildConfig, RebuildResult
from ..filtering.ignore import PathFilter, anchored_pattern
from .builder import SiteBuilder

logger = logging.getLogger(__name__)


def clear_directory(directory: Path) -> None:
    """Remove every immediate entry of ``directory``."""
    for entry in directory.iterdir():
        logger.debug(f"Deleting output-dir content at: {entry}")
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def copy_static(config: BuildConfig, target: Path) -> None:
    """Copy the static directory verbatim into ``target``."""
    logger.debug("*** Copying contents of static-dir to output-dir ... ***")
    shutil.copytree(config.abs(config.static_dir), target, dirs_exist_ok=True)


def pass_through_filter(
    config: BuildConfig, path_filter: PathFilter
) -> Callable[[str, list[str]], set[str]]:
    """Build a ``copytree`` ignore callback for the input directory."""
    extra = (
        anchored_pattern(config.partials_dir),
        f"**/*{config.template_extension}",
        f"**/{paths.INDEX_FILENAME}",
    )

    def ignore(directory: str, names: list[str]) -> set[str]:
        relative_dir = config.relative(directory)
        return {
            name
            for name in names
            if path_filter.is_excluded(
                paths.join(relative_dir, name),
                extra,
                is_dir=os.path.isdir(os.path.join(directory, name)),
            )
        }

    return ignore


def copy_pass_through(config: BuildConfig, path_filter: PathFilter, target: Path) -> None:
    """Copy non-template files of the input directory into ``target``."""
    logger.debug("*** Copying other contents to output-dir ... ***")
    shutil.copytree(
        config.abs(config.input_dir),
        target,
        ignore=pass_through_filter(config, path_filter),
        dirs_exist_ok=True,
    )


def publish(staging: Path, output_dir: Path) -> None:
    """Replace the contents of ``output_dir`` with the contents of ``staging``."""
    logger.debug("*** Deleting contents in output-dir ... ***")
    clear_directory(output_dir)
    for entry in staging.iterdir():
        shutil.move(str(entry), str(output_dir / entry.name))


def rebuild_output(config: BuildConfig) -> RebuildResult:
    """Run one full rebuild cycle.

    Args:
        config: Build configuration

    Returns:
        Result of the cycle; ``ok`` is False when any step failed
    """
    started = time.monotonic()
    staging = Path(tempfile.mkdtemp(prefix="temingo-"))
    try:
        path_filter = PathFilter(config)
        copy_static(config, staging)
        copy_pass_through(config, path_filter, staging)

        logger.debug("*** Starting templating process ... ***")
        report = SiteBuilder(config, path_filter, staging).build()

        publish(staging, config.abs(config.output_dir))
        report.outputs = [
            config.abs(config.output_dir) / output.relative_to(staging)
            for output in report.outputs
        ]
    except (TemingoError, OSError) as exc:
        logger.error(f"Build failed: {exc}")
        return RebuildResult(ok=False, error=str(exc), duration=time.monotonic() - started)
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    duration = time.monotonic() - started
    logger.info(
        f"*** Successfully built contents ({len(report.outputs)} page(s) in {duration:.2f}s). ***"
    )
    return RebuildResult(ok=True, report=report, duration=duration)
