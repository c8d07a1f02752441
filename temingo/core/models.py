"""Domain models for build configuration and build results."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from . import paths


def _root_relative(root: Path | None, value: str | Path) -> str:
    """Normalise ``value``; paths inside ``root`` become root-relative."""
    cleaned = paths.normalize(str(value))
    if root is None or not posixpath.isabs(cleaned):
        return cleaned
    for candidate in (Path(cleaned), Path(cleaned).resolve()):
        try:
            return paths.clean(candidate.relative_to(root).as_posix())
        except ValueError:
            continue
    return cleaned


@dataclass(frozen=True)
class TemplateRecord:
    """A discovered template file."""

    relative_path: str
    text: str


@dataclass(frozen=True)
class Breadcrumb:
    """One navigation step from the site root towards a page."""

    name: str
    path: str


@dataclass(frozen=True)
class SingleViewBinding:
    """A single-view template paired with one item it is rendered for."""

    template: TemplateRecord
    item_path: str
    item: dict[str, Any]
    output_path: Path


@dataclass
class BuildReport:
    """Outcome of one site builder pass."""

    outputs: list[Path] = field(default_factory=list)
    lists: dict[str, int] = field(default_factory=dict)


@dataclass
class RebuildResult:
    """Outcome of one rebuild cycle."""

    ok: bool
    report: BuildReport | None = None
    error: str | None = None
    duration: float = 0.0


class BuildConfig(BaseModel):
    """Validated configuration for the rendering pipeline.

    Every path except ``root`` is relative to ``root``; paths outside the
    root are kept absolute.
    """

    root: Path = Field(default_factory=Path.cwd, description="Working directory")
    values_files: list[str] = Field(
        default_factory=lambda: ["values.yaml"], description="Values files, merged in order"
    )
    input_dir: str = Field(default=".", description="Template directory")
    partials_dir: str = Field(default="partials", description="Partials directory")
    output_dir: str = Field(default="output", description="Output directory")
    static_dir: str = Field(default="static", description="Static files directory")
    template_extension: str = Field(default=".template", min_length=1)
    single_template_extension: str = Field(default=".single.template", min_length=1)
    partial_extension: str = Field(default=".partial", min_length=1)
    ignore_file: str = Field(default=".temingoignore", description="Ignore file")

    @field_validator("root")
    @classmethod
    def _resolve_root(cls, value: Path) -> Path:
        return value.resolve()

    @field_validator(
        "input_dir", "partials_dir", "output_dir", "static_dir", "ignore_file", mode="before"
    )
    @classmethod
    def _clean_path(cls, value: str | Path, info: ValidationInfo) -> str:
        return _root_relative(info.data.get("root"), value)

    @field_validator("values_files", mode="before")
    @classmethod
    def _clean_paths(cls, value: list[str | Path], info: ValidationInfo) -> list[str]:
        return [_root_relative(info.data.get("root"), item) for item in value]

    def abs(self, relative: str) -> Path:
        """Resolve a root-relative path against the build root.

        Absolute paths are returned unchanged.
        """
        return self.root / relative

    def relative(self, path: str | Path) -> str:
        """Express a filesystem path the way configured paths are stored."""
        return _root_relative(self.root, path)

    def site_path(self, relative: str) -> str:
        """Map a root-relative path inside the input directory to its site path."""
        return paths.relative_to(relative, self.input_dir)

    def input_path(self, site_path: str) -> str:
        """Map a site path back to its root-relative location."""
        return paths.join(self.input_dir, paths.clean(site_path))
