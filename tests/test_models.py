from __future__ import annotations

from temingo.core.models import BuildConfig


def test_relative_paths_are_normalised(tmp_path):
    config = BuildConfig(root=tmp_path, input_dir="./site/", values_files=["a/../values.yaml"])

    assert config.input_dir == "site"
    assert config.values_files == ["values.yaml"]


def test_absolute_paths_inside_the_root_become_relative(tmp_path):
    config = BuildConfig(
        root=tmp_path,
        output_dir=tmp_path / "public",
        values_files=[tmp_path / "values.yaml"],
    )

    assert config.output_dir == "public"
    assert config.values_files == ["values.yaml"]


def test_absolute_paths_outside_the_root_stay_absolute(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    outside = tmp_path.resolve() / "public"

    config = BuildConfig(root=root, output_dir=outside)

    assert config.output_dir == outside.as_posix()
    assert config.abs(config.output_dir) == outside
    assert config.relative(root / "blog") == "blog"
