# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""File system watcher that re-analyzes Java and Kotlin sources on change.

Uses the watchdog library for cross-platform file watching. Only files with
a supported extension (.java, .kt, .kts) that are not ignored trigger the
change callback.

Known Limitations:
- No debouncing: editors that write a file twice trigger two analyses
- Callbacks run on the watchdog observer thread
"""

import fnmatch
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Set

from watchdog.events import FileMovedEvent, FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from kotlex.languages import is_supported_path

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

logger = logging.getLogger(__name__)

# Callback signature: (filepath: str) -> None
ChangeCallback = Callable[[str], None]


class SourceWatcher:
    """Watches a directory tree for source file changes.

    Usage:
        watcher = SourceWatcher("/path/to/project", on_change=print)
        watcher.start()
        ...
        watcher.stop()
    """

    ALWAYS_IGNORED = {
        ".git",
        ".gradle",
        ".idea",
        "build",
        "out",
        "target",
        "node_modules",
        ".kotlex_logs",
    }

    def __init__(
        self,
        root: str,
        on_change: ChangeCallback,
        ignore_patterns: Optional[Iterable[str]] = None,
    ):
        """Initialize watcher.

        Args:
            root: Directory to watch recursively.
            on_change: Called with the path of each changed source file.
            ignore_patterns: Additional glob patterns to ignore.
        """
        self.root = Path(root).resolve()
        self.user_ignore_patterns: Set[str] = set(ignore_patterns or [])
        self._callbacks: List[ChangeCallback] = [on_change]

        self._observer: Optional[BaseObserver] = None
        self._event_handler = _SourceEventHandler(self)

        logger.info(f"SourceWatcher initialized for {self.root}")

    def should_ignore(self, file_path: str) -> bool:
        """Check whether a path matches an ignore pattern.

        Built-in patterns match any path component; user patterns match the
        path relative to the root or the file name.
        """
        path = Path(file_path)
        try:
            rel_path = path.relative_to(self.root)
        except ValueError:
            rel_path = path
        rel_path_str = str(rel_path)

        for part in rel_path.parts:
            if part in self.ALWAYS_IGNORED:
                return True

        for pattern in self.user_ignore_patterns:
            if fnmatch.fnmatch(rel_path_str, pattern) or fnmatch.fnmatch(path.name, pattern):
                return True

        return False

    def is_supported_file(self, file_path: str) -> bool:
        return is_supported_path(Path(file_path))

    def add_callback(self, callback: ChangeCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def notify(self, file_path: str) -> None:
        """Invoke all callbacks for a changed file.

        A failing callback is logged and does not stop the others.
        """
        for callback in self._callbacks:
            try:
                callback(file_path)
            except Exception as e:
                logger.error(f"Change callback failed for {file_path}: {e}")

    def start(self) -> None:
        """Start watching.

        Raises:
            RuntimeError: If watcher is already running
        """
        if self._observer is not None and self._observer.is_alive():
            raise RuntimeError("SourceWatcher is already running")

        self._observer = Observer()
        self._observer.schedule(  # type: ignore  # watchdog types vary by version
            self._event_handler, str(self.root), recursive=True
        )
        self._observer.start()  # type: ignore  # watchdog types vary by version

        logger.info(f"SourceWatcher started, monitoring {self.root}")

    def stop(self) -> None:
        """Stop watching and wait for the observer thread."""
        if self._observer is not None and self._observer.is_alive():
            self._observer.stop()  # type: ignore  # watchdog types vary by version
            self._observer.join(timeout=5.0)
            logger.info("SourceWatcher stopped")

    def is_running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()


class _SourceEventHandler(FileSystemEventHandler):
    """Internal event handler for watchdog; filters and forwards to SourceWatcher."""

    def __init__(self, watcher: SourceWatcher):
        super().__init__()
        self.watcher = watcher

    def _handle_path(self, file_path: str, event_type: str) -> None:
        if self.watcher.should_ignore(file_path):
            return
        if not self.watcher.is_supported_file(file_path):
            return
        logger.debug(f"Event: {event_type} - {file_path}")
        self.watcher.notify(file_path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle_path(str(event.src_path), event.event_type)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle_path(str(event.src_path), event.event_type)

    def on_moved(self, event: FileSystemEvent) -> None:
        """Renames into a supported name are treated as a change of the new path."""
        if event.is_directory or not isinstance(event, FileMovedEvent):
            return
        self._handle_path(str(event.dest_path), "moved_to")
