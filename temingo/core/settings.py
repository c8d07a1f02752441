from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults for every CLI flag, overridable through TEMINGO_* variables."""

    model_config = SettingsConfigDict(env_prefix="TEMINGO_", case_sensitive=False)

    values_files: list[Path] = [Path("values.yaml")]
    input_dir: Path = Path(".")
    partials_dir: Path = Path("partials")
    output_dir: Path = Path("output")
    static_dir: Path = Path("static")
    template_extension: str = ".template"
    single_template_extension: str = ".single.template"
    partial_extension: str = ".partial"
    ignore_file: Path = Path(".temingoignore")
