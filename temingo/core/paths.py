"""POSIX path helpers shared by discovery, list loading and output mapping.

Paths handled by the pipeline are POSIX strings relative to the build root
(the working directory). ``"."`` denotes the root itself. Configured
directories outside the root keep their absolute form.
"""

from __future__ import annotations

import posixpath
import re

from .errors import PathValidationError

PATH_PATTERN = "^[a-z0-9-_./]+$"
_PATH_RE = re.compile(PATH_PATTERN)

INDEX_FILENAME = "index.yaml"


def clean(path: str) -> str:
    """Normalise a relative path, stripping leading slashes."""
    cleaned = posixpath.normpath(path.replace("\\", "/").lstrip("/") or ".")
    return cleaned


def normalize(path: str) -> str:
    """Normalise a filesystem path, keeping absolute paths absolute."""
    return posixpath.normpath(path.replace("\\", "/") or ".")


def join(*parts: str) -> str:
    """Join path segments, dropping empty and ``"."`` segments."""
    segments = [part for part in parts if part not in ("", ".")]
    if not segments:
        return "."
    return posixpath.join(*segments)


def relative_to(path: str, base: str) -> str:
    """Return ``path`` relative to ``base`` (both root-relative)."""
    if base == ".":
        return path
    if path == base:
        return "."
    prefix = base.rstrip("/") + "/"
    if not path.startswith(prefix):
        raise ValueError(f"{path!r} is not inside {base!r}")
    return path[len(prefix):]


def validate(path: str, what: str = "path") -> str:
    """Ensure ``path`` only contains characters safe for a public URL."""
    if not _PATH_RE.fullmatch(path):
        raise PathValidationError(
            f"The {what} '{path}' doesn't validate against the regular expression '{PATH_PATTERN}'."
        )
    return path
