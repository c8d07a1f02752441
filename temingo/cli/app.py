"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.models import BuildConfig
from ..core.settings import Settings
from ..site.rebuild import rebuild_output
from ..site.watch import watch_and_rebuild
from .parsers import existing_dir, existing_file, extension

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="temingo",
    help="Static site generator rendering Jinja2 templates with YAML values.",
    add_completion=False,
)


def build_config(
    root: Path,
    settings: Settings,
    values_files: Optional[list[Path]],
    input_dir: Optional[Path],
    partials_dir: Optional[Path],
    output_dir: Optional[Path],
    static_dir: Optional[Path],
    template_extension: Optional[str],
    single_template_extension: Optional[str],
    partial_extension: Optional[str],
    ignore_file: Optional[Path],
) -> BuildConfig:
    """Merge CLI values over settings and validate every path before rendering."""
    return BuildConfig(
        root=root,
        values_files=[
            existing_file(root, path, "Values file")
            for path in (values_files or settings.values_files)
        ],
        input_dir=existing_dir(root, input_dir or settings.input_dir, "input-directory"),
        partials_dir=existing_dir(
            root, partials_dir or settings.partials_dir, "partial-files-directory"
        ),
        output_dir=existing_dir(root, output_dir or settings.output_dir, "output-directory"),
        static_dir=existing_dir(root, static_dir or settings.static_dir, "static-files-directory"),
        template_extension=extension(
            template_extension or settings.template_extension, "Template extension"
        ),
        single_template_extension=extension(
            single_template_extension or settings.single_template_extension,
            "Single-view template extension",
        ),
        partial_extension=extension(
            partial_extension or settings.partial_extension, "Partial extension"
        ),
        ignore_file=existing_file(root, ignore_file or settings.ignore_file, "Ignore file"),
    )


@app.command()
def build(
    values_files: Annotated[
        Optional[list[Path]],
        typer.Option(
            "--valuesfile",
            "-f",
            help="Path to a values file. Repeatable; later files override earlier ones. [default: values.yaml]",
            metavar="FILE",
        ),
    ] = None,
    input_dir: Annotated[
        Optional[Path],
        typer.Option("--inputDir", "-i", help="Template directory. [default: .]", metavar="DIR"),
    ] = None,
    partials_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--partialsDir", "-p", help="Partials directory. [default: partials]", metavar="DIR"
        ),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--outputDir", "-o", help="Destination of the rendered site. [default: output]", metavar="DIR"
        ),
    ] = None,
    static_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--staticDir", "-s", help="Static files copied verbatim. [default: static]", metavar="DIR"
        ),
    ] = None,
    template_extension: Annotated[
        Optional[str],
        typer.Option(
            "--templateExtension", "-t", help="Extension of template files. [default: .template]"
        ),
    ] = None,
    single_template_extension: Annotated[
        Optional[str],
        typer.Option(
            "--singleTemplateExtension",
            help="Extension of single-view template files; never rendered as normal templates. [default: .single.template]",
        ),
    ] = None,
    partial_extension: Annotated[
        Optional[str],
        typer.Option("--partialExtension", help="Extension of partial files. [default: .partial]"),
    ] = None,
    ignore_file: Annotated[
        Optional[Path],
        typer.Option(
            "--temingoignore", help="Path to the ignore file. [default: .temingoignore]", metavar="FILE"
        ),
    ] = None,
    watch: Annotated[
        bool,
        typer.Option(
            "--watch",
            "-w",
            help="Watch the template directory, partials directory and values files.",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="Enable debug logging."),
    ] = False,
) -> None:
    """Render the site into the output directory."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    config = build_config(
        Path.cwd(),
        Settings(),
        values_files,
        input_dir,
        partials_dir,
        output_dir,
        static_dir,
        template_extension,
        single_template_extension,
        partial_extension,
        ignore_file,
    )
    for key, value in config.model_dump().items():
        logger.debug(f"{key}: {value}")
    logger.debug(f"watch: {watch}")

    if watch:
        watch_and_rebuild(config)
        return

    result = rebuild_output(config)
    if not result.ok:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
