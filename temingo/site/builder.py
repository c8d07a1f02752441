"""Site builder: renders normal and single-view templates into the output tree."""

from __future__ import annotations

import logging
import os
import posixpath
from functools import partial
from pathlib import Path
from typing import Any, Mapping

from ..core import paths
from ..core.errors import TemingoError
from ..core.models import (
    Breadcrumb,
    BuildConfig,
    BuildReport,
    SingleViewBinding,
    TemplateRecord,
)
from ..filtering.discovery import discover
from ..filtering.ignore import PathFilter, anchored_pattern
from ..rendering.engine import Renderer
from ..rendering.io import write_output
from ..values.lists import ListCache, load_list_objects
from ..values.store import derive, dump_values, freeze, load_merged, load_yaml

logger = logging.getLogger(__name__)


def create_breadcrumbs(path: str) -> list[Breadcrumb]:
    """Create breadcrumbs for every segment of ``path`` except the last one.

    Example:
        >>> [(b.name, b.path) for b in create_breadcrumbs("a/b/c")]
        [('a', '/a'), ('b', '/a/b')]
    """
    path = paths.clean(path)
    if path == ".":
        return []
    segments = path.split("/")
    breadcrumbs: list[Breadcrumb] = []
    current = ""
    for segment in segments[:-1]:
        current = f"{current}/{segment}"
        breadcrumbs.append(Breadcrumb(name=segment, path=current))
    return breadcrumbs


def strip_suffix(value: str, suffix: str) -> str:
    return value[: -len(suffix)] if suffix and value.endswith(suffix) else value


class SiteBuilder:
    """Renders every template of the input tree for one build cycle.

    Args:
        config: Build configuration
        path_filter: Exclusion rules for this cycle
        output_root: Directory receiving the rendered files
    """

    def __init__(self, config: BuildConfig, path_filter: PathFilter, output_root: Path) -> None:
        self.config = config
        self.path_filter = path_filter
        self.output_root = output_root
        self.list_cache = ListCache()
        self.values: Mapping[str, Any] = {}
        self.renderer: Renderer | None = None

    def build(self) -> BuildReport:
        """Load values and partials, then render all templates."""
        config = self.config

        logger.debug("*** Reading values file(s) ... ***")
        self.values = freeze(load_merged(config.abs(path) for path in config.values_files))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("*** General values-object: ***\n" + dump_values(self.values))

        partials = discover(config, self.path_filter, config.partials_dir, config.partial_extension)
        self.renderer = Renderer(
            partials,
            partial(load_list_objects, config),
            self.list_cache,
            partials_dir=config.partials_dir,
            partial_extension=config.partial_extension,
            site_path=config.site_path,
        )

        report = BuildReport()
        report.outputs.extend(self.render_templates())
        report.outputs.extend(self.render_single_views())
        report.lists = self.list_cache.summary()
        return report

    def _write(self, template: TemplateRecord, data: Mapping[str, Any], output_path: Path) -> Path:
        if self.renderer is None:
            raise TemingoError("Templates cannot be rendered before partials are loaded")
        logger.debug(f"Writing output file '{output_path}' ...")
        content = self.renderer.render(template.relative_path, template.text, data)
        try:
            write_output(output_path, content)
        except OSError as exc:
            raise TemingoError(f"Cannot write '{output_path}': {exc}") from exc
        return output_path

    def _breadcrumbs(self, template: TemplateRecord) -> list[Breadcrumb]:
        template_dir = posixpath.dirname(self.config.site_path(template.relative_path))
        logger.debug(f"Creating breadcrumbs for '{template_dir or '.'}'.")
        return create_breadcrumbs(template_dir)

    def render_templates(self) -> list[Path]:
        """Render every normal template once, against the shared values."""
        config = self.config
        templates = discover(
            config,
            self.path_filter,
            config.input_dir,
            config.template_extension,
            [
                f"**/*{config.single_template_extension}",
                anchored_pattern(config.partials_dir),
            ],
        )

        outputs: list[Path] = []
        for template in templates:
            site_path = strip_suffix(
                config.site_path(template.relative_path), config.template_extension
            )
            data = derive(self.values, breadcrumbs=self._breadcrumbs(template))
            outputs.append(self._write(template, data, self.output_root / site_path))
        logger.debug(f"Rendered {len(outputs)} normal template(s)")
        return outputs

    def collect_items(self, template: TemplateRecord) -> dict[str, dict[str, Any]]:
        """Load the items next to a single-view template.

        Items are the immediate subdirectories of the template's directory
        that contain an ``index.yaml``.
        """
        template_dir = posixpath.dirname(template.relative_path) or "."
        try:
            entries = sorted(os.scandir(self.config.abs(template_dir)), key=lambda e: e.name)
        except OSError as exc:
            raise TemingoError(f"Cannot list directory '{template_dir}': {exc}") from exc

        items: dict[str, dict[str, Any]] = {}
        for entry in entries:
            if not entry.is_dir():
                continue
            index_path = Path(entry.path) / paths.INDEX_FILENAME
            if index_path.is_file():
                items[paths.join(template_dir, entry.name)] = load_yaml(index_path)
        return items

    def bind_single_views(self, template: TemplateRecord) -> list[SingleViewBinding]:
        """Pair a single-view template with each of its sibling items."""
        config = self.config
        file_name = strip_suffix(
            posixpath.basename(template.relative_path), config.single_template_extension
        )
        bindings = []
        for item_dir, item in self.collect_items(template).items():
            item_path = strip_suffix(config.site_path(item_dir), ".yaml")
            bindings.append(
                SingleViewBinding(
                    template=template,
                    item_path=item_path,
                    item=item,
                    output_path=self.output_root / item_path / file_name,
                )
            )
        return bindings

    def render_single_views(self) -> list[Path]:
        """Render every single-view template once per sibling item."""
        config = self.config
        templates = discover(
            config,
            self.path_filter,
            config.input_dir,
            config.single_template_extension,
            [
                anchored_pattern(config.partials_dir, "**"),
                anchored_pattern(config.output_dir, "**"),
            ],
        )

        outputs: list[Path] = []
        for template in templates:
            breadcrumbs = self._breadcrumbs(template)
            for binding in self.bind_single_views(template):
                logger.debug(
                    f"Writing single-view output from '{binding.item_path}' "
                    f"to '{binding.output_path}' ..."
                )
                data = derive(
                    self.values,
                    breadcrumbs=breadcrumbs,
                    ItemPath="/" + binding.item_path,
                    Item=binding.item,
                )
                outputs.append(self._write(template, data, binding.output_path))
        logger.debug(f"Rendered {len(outputs)} single-view page(s)")
        return outputs
