import logging

from cadence.injection import MemoryTarget
from cadence.watch import StyleWatcher, _ChangeHandler


class DummyEvent:
    def __init__(self, path, is_directory=False):
        self.src_path = path
        self.is_directory = is_directory


def write_config(root, text):
    (root / "cadence.yaml").write_text(text, encoding="utf-8")


def test_reload_injects_only_on_change(tmp_path):
    write_config(tmp_path, "theme: default\n")
    target = MemoryTarget()
    watcher = StyleWatcher(tmp_path, target, environ={})

    context = watcher.reload()
    assert context is not None
    assert target.injections == 1

    assert watcher.reload() is context
    assert target.injections == 1

    write_config(tmp_path, "theme: de-young\nsite_title: Changed\n")
    reloaded = watcher.reload()
    assert reloaded.config.title == "De Young"
    assert target.injections == 2


def test_reload_keeps_previous_context_on_error(tmp_path, caplog):
    write_config(tmp_path, "theme: default\n")
    target = MemoryTarget()
    watcher = StyleWatcher(tmp_path, target, environ={})
    good = watcher.reload()

    write_config(tmp_path, "theme: missing-theme\n")
    with caplog.at_level(logging.ERROR, logger="cadence.watch"):
        assert watcher.reload() is good
    assert "Theme reload failed" in caplog.text
    assert target.injections == 1


def test_change_handler_filters_events(tmp_path):
    calls = []

    class FakeWatcher:
        def reload(self):
            calls.append(True)

    handler = _ChangeHandler(FakeWatcher())
    handler.on_any_event(DummyEvent(str(tmp_path), is_directory=True))
    handler.on_any_event(DummyEvent(str(tmp_path / "index.html")))
    handler.on_any_event(DummyEvent(str(tmp_path / "typography.css")))
    assert calls == []

    handler.on_any_event(DummyEvent(str(tmp_path / "cadence.yaml")))
    handler.on_any_event(DummyEvent(str(tmp_path / "themes" / "mine.yml")))
    assert len(calls) == 2


def test_stop_without_start_is_noop(tmp_path):
    watcher = StyleWatcher(tmp_path, MemoryTarget(), environ={})
    watcher.stop()
    assert watcher._observer is None
