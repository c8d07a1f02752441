"""CLI argument validators."""

from __future__ import annotations

from pathlib import Path

import typer

from ..core import paths


def existing_file(root: Path, value: Path | str, label: str) -> str:
    """Normalise ``value`` and require it to be an existing file.

    Relative values are resolved against ``root``; absolute ones are kept.
    """
    cleaned = paths.normalize(str(value))
    target = root / cleaned
    if not target.exists():
        raise typer.BadParameter(f"{label} does not exist: {cleaned}")
    if target.is_dir():
        raise typer.BadParameter(f"{label} is not a file (but a directory): {cleaned}")
    return cleaned


def existing_dir(root: Path, value: Path | str, label: str) -> str:
    """Normalise ``value`` and require it to be an existing directory."""
    cleaned = paths.normalize(str(value))
    target = root / cleaned
    if not target.exists():
        raise typer.BadParameter(f"Given {label} does not exist: {cleaned}")
    if not target.is_dir():
        raise typer.BadParameter(f"Given {label} is not a directory: {cleaned}")
    return cleaned


def extension(value: str, label: str) -> str:
    """Require a non-empty file name suffix."""
    if not value:
        raise typer.BadParameter(f"{label} must not be empty")
    return value
