"""File I/O operations for rendered output."""

from __future__ import annotations

from pathlib import Path


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def write_output(path: Path, content: bytes) -> None:
    """Write rendered bytes, creating parent directories as needed."""
    ensure_parent(path)
    path.write_bytes(content)
