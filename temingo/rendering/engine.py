"""Template rendering engine."""

from __future__ import annotations

import logging
import posixpath
from typing import Any, Callable, Mapping, Sequence

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError
from markupsafe import Markup

from ..core.errors import TemplateRenderError
from ..core.models import TemplateRecord
from ..values.lists import ListCache
from ..values.store import deep_merge
from .functions import FUNCTIONS

logger = logging.getLogger(__name__)

ListLoader = Callable[[str], Mapping[str, Any]]


def partial_name(relative_path: str, partials_dir: str, extension: str) -> str:
    """Name a partial by its path below the partials directory, without extension.

    Example:
        >>> partial_name("partials/nav/menu.partial", "partials", ".partial")
        'nav/menu'
    """
    name = relative_path
    if partials_dir != "." and name.startswith(partials_dir.rstrip("/") + "/"):
        name = name[len(partials_dir.rstrip("/")) + 1 :]
    if name.endswith(extension):
        name = name[: -len(extension)]
    return name


def create_environment(sources: dict[str, str]) -> Environment:
    """Create the Jinja2 environment backing one compiled template set."""
    return Environment(
        loader=DictLoader(sources),
        undefined=StrictUndefined,
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class Renderer:
    """A compiled template set: partials, base templates and helper functions.

    One renderer serves a whole build cycle. ``include`` and ``list`` are
    bound to this instance so templates can call back into the set they
    belong to.

    Args:
        partials: Partial templates shared by every render
        list_loader: Loads the list objects of a site directory
        list_cache: Cache collecting list views for this cycle
        partials_dir: Root-relative partials directory (used for naming)
        partial_extension: Extension stripped from partial names
        site_path: Maps a template's root-relative path to its site path
    """

    def __init__(
        self,
        partials: Sequence[TemplateRecord],
        list_loader: ListLoader,
        list_cache: ListCache,
        *,
        partials_dir: str = "partials",
        partial_extension: str = ".partial",
        site_path: Callable[[str], str] = lambda path: path,
    ) -> None:
        self._sources: dict[str, str] = {}
        self._list_loader = list_loader
        self._site_path = site_path
        self.list_cache = list_cache
        self.current: str | None = None

        self.env = create_environment(self._sources)
        self.env.globals.update(FUNCTIONS)
        self.env.globals["include"] = self.include
        self.env.globals["list"] = self.list

        for partial in partials:
            name = partial_name(partial.relative_path, partials_dir, partial_extension)
            self._sources[name] = partial.text
            self._compile(name)
        logger.debug(f"Compiled {len(partials)} partial(s)")

    def _compile(self, name: str) -> Any:
        try:
            return self.env.get_template(name)
        except TemplateError as exc:
            raise TemplateRenderError(f"Cannot compile template '{name}': {exc}") from exc

    def render(self, name: str, text: str, data: Mapping[str, Any]) -> bytes:
        """Compile ``text`` as ``name`` into the set and execute it against ``data``.

        Args:
            name: Template name (its root-relative path)
            text: Template source
            data: Values visible to the template

        Returns:
            Rendered output encoded as UTF-8

        Raises:
            TemplateRenderError: If compilation or execution fails
        """
        logger.debug(f"Rendering template: {name}")
        self._sources[name] = text
        template = self._compile(name)

        previous, self.current = self.current, name
        try:
            rendered = template.render(dict(data))
        except TemplateRenderError:
            raise
        except Exception as exc:
            raise TemplateRenderError(f"Cannot render template '{name}': {exc}") from exc
        finally:
            self.current = previous
        return rendered.encode("utf-8")

    def include(self, name: str, data: Mapping[str, Any] | None = None) -> Markup:
        """Execute another template of the set with ``data`` and return its output."""
        template = self._compile(name)
        return Markup(template.render(dict(data or {})))

    def list(self, *list_dirs: str) -> dict[str, Any]:
        """Collect the list objects of one or more site directories.

        Defaults to the directory of the template being rendered. Each
        directory's objects are merged into one cumulative mapping, which is
        also recorded in the cycle's list cache under every directory.
        """
        if not list_dirs:
            if self.current is None:
                raise TemplateRenderError("list() called outside of a render")
            list_dirs = (posixpath.dirname(self._site_path(self.current)) or ".",)

        objects: dict[str, Any] = {}
        for list_dir in list_dirs:
            objects = deep_merge(objects, self._list_loader(list_dir))
            self.list_cache.record(list_dir, objects)
        return objects
