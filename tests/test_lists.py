from __future__ import annotations

import pytest

from temingo.core.errors import PathValidationError, ValuesFileError
from temingo.core.models import BuildConfig
from temingo.values.lists import ListCache, load_list_objects

from tests.conftest import write


def test_only_directories_with_index_become_list_objects(site_root, config):
    write(site_root, "blog/item1/index.yaml", 'title: "A"\n')
    (site_root / "blog/item2").mkdir()
    write(site_root, "blog/readme.txt", "not an item")

    objects = load_list_objects(config, "blog")

    assert objects == {"blog/item1": {"title": "A", "Path": "/blog/item1"}}


def test_list_dir_is_relative_to_the_input_dir(tmp_path):
    write(tmp_path, "site/news/n1/index.yaml", "title: N\n")
    config = BuildConfig(root=tmp_path, input_dir="site")

    objects = load_list_objects(config, "/news")

    assert objects == {"news/n1": {"title": "N", "Path": "/news/n1"}}


def test_items_are_ordered_by_name(site_root, config):
    for name in ("c", "a", "b"):
        write(site_root, f"blog/{name}/index.yaml", f"name: {name}\n")

    assert list(load_list_objects(config, "blog")) == ["blog/a", "blog/b", "blog/c"]


def test_unsafe_item_path_is_fatal(site_root, config):
    write(site_root, "blog/My Post/index.yaml", "title: A\n")

    with pytest.raises(PathValidationError):
        load_list_objects(config, "blog")


def test_missing_list_dir_is_fatal(config):
    with pytest.raises(ValuesFileError):
        load_list_objects(config, "nowhere")


def test_cache_merges_repeated_records():
    cache = ListCache()

    cache.record("blog", {"blog/a": {"title": "A"}})
    cache.record("/blog", {"blog/b": {"title": "B"}})

    assert cache.summary() == {"blog": 2}
