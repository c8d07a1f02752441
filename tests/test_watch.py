from __future__ import annotations

import threading

from watchfiles import Change, DefaultFilter

from temingo.core.models import RebuildResult
from temingo.site.watch import POLL_STEP_MS, watch_and_rebuild, watch_filter, watched_paths


class RecordingWatch:
    def __init__(self, batches):
        self.batches = batches
        self.args = None
        self.kwargs = None

    def __call__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs
        yield from self.batches


class RecordingRebuild:
    def __init__(self, results):
        self.results = list(results)
        self.calls = 0

    def __call__(self, config):
        self.calls += 1
        return self.results.pop(0) if self.results else RebuildResult(ok=True)


def test_watched_paths_cover_inputs_partials_and_values(config):
    assert watched_paths(config) == [
        config.abs("."),
        config.abs("partials"),
        config.abs("values.yaml"),
    ]


def test_filter_ignores_output_and_git(config):
    change_filter = watch_filter(config)

    assert isinstance(change_filter, DefaultFilter)
    assert not change_filter(Change.modified, str(config.abs("output/index.html")))
    assert not change_filter(Change.modified, str(config.abs(".git/HEAD")))
    assert change_filter(Change.modified, str(config.abs("index.html.template")))


def test_builds_once_then_once_per_batch(config):
    batches = [
        {(Change.modified, str(config.abs("index.html.template")))},
        set(),
        {
            (Change.added, str(config.abs("blog/a/index.yaml"))),
            (Change.modified, str(config.abs("values.yaml"))),
        },
    ]
    watch_fn = RecordingWatch(batches)
    rebuild = RecordingRebuild([])

    rebuilds = watch_and_rebuild(config, watch_fn=watch_fn, rebuild=rebuild)

    assert rebuilds == 2
    assert rebuild.calls == 3
    assert watch_fn.args == tuple(watched_paths(config))
    assert watch_fn.kwargs["step"] == POLL_STEP_MS == 100
    assert watch_fn.kwargs["raise_interrupt"] is False


def test_failed_rebuild_keeps_watching(config):
    batches = [
        {(Change.modified, str(config.abs("index.html.template")))},
        {(Change.modified, str(config.abs("index.html.template")))},
    ]
    rebuild = RecordingRebuild(
        [RebuildResult(ok=True), RebuildResult(ok=False, error="boom"), RebuildResult(ok=True)]
    )

    rebuilds = watch_and_rebuild(config, watch_fn=RecordingWatch(batches), rebuild=rebuild)

    assert rebuilds == 2
    assert rebuild.calls == 3


def test_stop_event_is_passed_to_the_watcher(config):
    stop = threading.Event()
    watch_fn = RecordingWatch([])

    watch_and_rebuild(config, watch_fn=watch_fn, stop_event=stop, rebuild=RecordingRebuild([]))

    assert watch_fn.kwargs["stop_event"] is stop


def test_real_watcher_stops_when_the_event_is_set(config):
    stop = threading.Event()
    stop.set()
    rebuild = RecordingRebuild([])

    assert watch_and_rebuild(config, stop_event=stop, rebuild=rebuild) == 0
    assert rebuild.calls == 1
