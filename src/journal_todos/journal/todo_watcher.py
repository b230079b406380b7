"""File system watcher for the journal todos folder."""

import logging
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from journal_todos.journal.record import RECORD_EXTENSION

logger = logging.getLogger(__name__)

# Callback(event_type, todo_path)
TodoEventCallback = Callable[[str, str], None]

REPORTED_EVENTS = frozenset({"created", "modified", "deleted", "moved"})


class TodoWatcher:
    """Reports records added, edited, moved or removed by any program.

    The watchdog observer runs in its own daemon thread; callbacks are
    invoked from that thread.
    """

    def __init__(self, todos_dir: Path, callback: TodoEventCallback) -> None:
        self.todos_dir = todos_dir
        self._callback = callback
        self._observer: BaseObserver | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        """Start observing the todos folder (non-recursive)."""
        if self.running:
            return
        observer = Observer()
        observer.daemon = True
        observer.schedule(_TodoEventHandler(self._callback), str(self.todos_dir), recursive=False)
        observer.start()
        self._observer = observer
        logger.info(f"[TodoWatcher] Watching {self.todos_dir}")

    def stop(self, timeout: float = 2.0) -> None:
        """Stop observing and wait for the observer thread."""
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join(timeout=timeout)
        logger.info(f"[TodoWatcher] Stopped watching {self.todos_dir}")


class _TodoEventHandler(FileSystemEventHandler):
    def __init__(self, callback: TodoEventCallback) -> None:
        self._callback = callback

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in REPORTED_EVENTS:
            return

        todo_path = record_path_of(event)
        if todo_path is None:
            return

        logger.debug(f"[TodoWatcher] {event.event_type}: {todo_path}")
        try:
            self._callback(event.event_type, todo_path)
        except Exception as e:
            logger.error(f"[TodoWatcher] Callback error for {todo_path}: {e}", exc_info=True)


def record_path_of(event: FileSystemEvent) -> str | None:
    """Return the record path an event is about, or None for non-record files.

    An atomic write arrives as a move of the temp file onto the record, so
    moves are judged by their destination.
    """
    raw_path = getattr(event, "dest_path", "") if event.event_type == "moved" else ""
    raw_path = raw_path or event.src_path
    if isinstance(raw_path, bytes):
        raw_path = raw_path.decode("utf-8")
    if Path(raw_path).suffix != RECORD_EXTENSION:
        return None
    return raw_path
