from __future__ import annotations

from pathlib import Path

import pytest

from temingo.core.models import BuildConfig


def write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A minimal site laid out with the default directory names."""
    root = tmp_path / "site"
    write(root, "values.yaml", "title: Hello\nnav:\n  home: /\n")
    write(root, ".temingoignore", "secret/\n")
    write(root, "partials/header.partial", "<h1>{{ title }}</h1>")
    write(root, "static/style.css", "body {}\n")
    (root / "output").mkdir()
    write(root, "index.html.template", "{{ include('header', {'title': title}) }}\n")
    return root


@pytest.fixture
def config(site_root: Path) -> BuildConfig:
    return BuildConfig(root=site_root)
