"""Error hierarchy for the build pipeline.

Every error raised here aborts the current build cycle.
"""

from __future__ import annotations


class TemingoError(Exception):
    """Base class for all build failures."""


class ConfigurationError(TemingoError):
    """Raised when the build configuration is unusable."""


class IgnoreFileError(TemingoError):
    """Raised when the ignore file cannot be read."""


class PathValidationError(TemingoError, ValueError):
    """Raised when a path is not safe to publish as part of a URL."""


class ValuesFileError(TemingoError):
    """Raised when a values or item data file cannot be loaded."""


class TemplateRenderError(TemingoError):
    """Raised when a template fails to compile or execute."""
