"""Todo store over the journal's todos folder."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from journal_todos.journal.atomic import write_atomic
from journal_todos.journal.errors import DecodeError, NotFoundError, StoreIOError
from journal_todos.journal.models import TodoFrontmatter, TodoSummary
from journal_todos.journal.record import RECORD_EXTENSION, decode, encode, title_of
from journal_todos.journal.store_root import resolve_store_root

logger = logging.getLogger(__name__)

TODOS_FOLDER = "todos"
STATUS_PENDING = "pending"
STATUS_DONE = "done"


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Format as RFC 3339 with second precision and a Z suffix."""
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


class TodoStore(Protocol):
    """Protocol for reading and updating todos."""

    def list_pending(self) -> list[TodoSummary]:
        """List pending todos, newest first."""
        ...

    def set_status(self, path: Path, new_status: str) -> None:
        """Set the status of a single todo record."""
        ...


class JournalTodoStore:
    """Todo store backed by markdown files in <root>/todos."""

    def __init__(
        self,
        root_resolver: Callable[[], Path] = resolve_store_root,
        clock: Callable[[], datetime] = utc_now,
        skip_malformed: bool = False,
    ) -> None:
        """Initialize store.

        Args:
            root_resolver: Returns the store root; called on every operation
            clock: Source of the current time for updated/completed stamps
            skip_malformed: Log and skip undecodable records instead of failing the listing
        """
        self._root_resolver = root_resolver
        self._clock = clock
        self._skip_malformed = skip_malformed

    def todos_dir(self) -> Path:
        """Return the todos folder under the current store root."""
        return self._root_resolver() / TODOS_FOLDER

    def list_pending(self) -> list[TodoSummary]:
        """List todos with status pending, ordered by path descending.

        Record file names are creation-ordered, so descending path order
        puts the newest todo first.
        """
        return self.list_todos(status_filter=[STATUS_PENDING])

    def list_todos(self, status_filter: list[str] | None = None) -> list[TodoSummary]:
        """List todos, optionally filtered by status.

        Args:
            status_filter: Statuses to keep, None keeps every record

        Returns:
            Summaries ordered by path descending; empty if the todos folder is missing

        Raises:
            DecodeError: If a record is malformed and skip_malformed is off
            StoreIOError: If the folder or a record cannot be read
        """
        todos_dir = self.todos_dir()
        if not todos_dir.exists():
            logger.debug(f"[TodoStore] No todos folder at {todos_dir}")
            return []

        try:
            candidates = [
                p for p in todos_dir.iterdir() if p.suffix == RECORD_EXTENSION and p.is_file()
            ]
        except OSError as e:
            raise StoreIOError(f"Failed to read dir {todos_dir}: {e}") from e

        items: list[TodoSummary] = []
        for file_path in candidates:
            try:
                header, body = self.read_todo(file_path)
            except DecodeError as e:
                if not self._skip_malformed:
                    raise
                logger.warning(f"[TodoStore] Skipping malformed {file_path.name}: {e}")
                continue
            except NotFoundError:
                # Removed by another program between listing and reading
                logger.debug(f"[TodoStore] {file_path.name} vanished during listing")
                continue

            if status_filter is not None and header.status not in status_filter:
                continue
            items.append(_to_summary(file_path, header, body))

        # newest first by filename
        items.sort(key=lambda item: item.path, reverse=True)
        return items

    def read_todo(self, path: Path) -> tuple[TodoFrontmatter, str]:
        """Read and decode a single record.

        Raises:
            NotFoundError: If the file does not exist
            StoreIOError: If the file cannot be read
            DecodeError: If the record is malformed
        """
        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(f"Todo not found: {path}") from e
        except OSError as e:
            raise StoreIOError(f"Failed to read todo file {path}: {e}") from e

        try:
            return decode(raw)
        except DecodeError as e:
            # Keep the concrete error type, add the offending file
            raise type(e)(f"Failed to parse todo file {path}: {e}") from e

    def set_status(self, path: Path, new_status: str) -> None:
        """Set status, refresh updated, and stamp completed when entering done.

        Any status string is accepted. Moving away from done keeps the
        existing completed stamp.

        Raises:
            NotFoundError: If the record does not exist
            DecodeError: If the record is malformed
            StoreIOError: If the record cannot be read or written
        """
        header, body = self.read_todo(path)
        previous = header.status
        now = format_timestamp(self._clock())

        header.status = new_status
        header.updated = now
        if new_status == STATUS_DONE:
            header.completed = now

        write_atomic(path, encode(header, body))
        logger.info(f"[TodoStore] {header.id}: {previous} -> {new_status} ({path.name})")


def _to_summary(file_path: Path, header: TodoFrontmatter, body: str) -> TodoSummary:
    return TodoSummary(
        path=str(file_path),
        id=header.id,
        text=title_of(body),
        linked_note=header.linked_note,
        status=header.status,
        priority=header.priority,
        due=header.due,
        created=header.created,
    )
