"""Temingo - Static site generator driven by Jinja2 templates and YAML values.

Renders a tree of templates, partials and per-item data files into a
static output directory, optionally re-rendering on file changes.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
