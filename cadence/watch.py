"""Hot reload of typography styles for Cadence.

Watches a project's configuration and theme files and, when they change,
re-runs the bootstrap and re-injects the styles into the target. Targets
replace their previous contents, so repeated reloads never stack up
duplicate styles.

Key classes:
- StyleWatcher: Re-initializes and re-injects on change.
- _ChangeHandler: File system event handler triggering reloads.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .bootstrap import AppContext, initialize_project
from .config import ConfigurationError
from .protocols import StyleTarget

logger = logging.getLogger(__name__)

WATCHED_SUFFIXES = (".yaml", ".yml")


class StyleWatcher:
    """Re-applies typography styles when project files change.

    Attributes:
        project_root: Directory containing cadence.yaml.
        target: Style target reloaded styles are injected into.
        context: Most recent successfully initialized context.
    """

    def __init__(
        self,
        project_root: Path,
        target: StyleTarget,
        environ: Mapping[str, str] | None = None,
    ):
        self.project_root = project_root
        self.target = target
        self.environ = environ
        self.context: AppContext | None = None
        self._observer: Observer | None = None
        self._last_signature: tuple | None = None
        self._reloading = False

    def reload(self) -> AppContext | None:
        """Re-initialize and inject if watched files changed.

        An invalid configuration is logged and the previous context kept, so
        a typo while editing does not stop the watcher.

        Returns:
            The current context.
        """
        signature = self._compute_signature()
        if self._reloading or (self.context is not None and signature == self._last_signature):
            return self.context
        self._reloading = True
        try:
            self.context = initialize_project(self.project_root, self.environ, self.target)
            self._last_signature = signature
            logger.info("Reloaded theme %r", self.context.config.title)
        except ConfigurationError as exc:
            logger.error("Theme reload failed: %s", exc)
        finally:
            self._reloading = False
        return self.context

    def start(self) -> None:  # pragma: no cover - integration path
        self.reload()
        handler = _ChangeHandler(self)
        observer = Observer()
        observer.schedule(handler, str(self.project_root), recursive=True)
        observer.start()
        self._observer = observer
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            self.stop()

    def stop(self) -> None:
        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def _compute_signature(self) -> tuple:
        entries: list[tuple] = []
        for path in sorted(self.project_root.rglob("*")):
            if path.is_dir() or path.suffix.lower() not in WATCHED_SUFFIXES:
                continue
            try:
                stat = path.stat()
            except OSError:
                continue
            rel = path.relative_to(self.project_root)
            entries.append((str(rel), stat.st_mtime_ns, stat.st_size))
        return tuple(entries)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watcher: StyleWatcher):
        super().__init__()
        self.watcher = watcher

    def on_any_event(self, event):
        if event.is_directory:
            return
        path = Path(event.src_path)
        if path.suffix.lower() not in WATCHED_SUFFIXES:
            return
        self.watcher.reload()
