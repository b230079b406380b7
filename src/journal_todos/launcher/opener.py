"""Open linked notes with the platform's default application."""

import logging
import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from journal_todos.journal.errors import LaunchError, NotFoundError
from journal_todos.journal.store_root import resolve_store_root

logger = logging.getLogger(__name__)


class Launcher(Protocol):
    """Protocol for handing a file to the OS default handler."""

    def launch(self, path: Path) -> None:
        """Start the default application for path without waiting for it."""
        ...


class CommandLauncher:
    """Launcher that spawns an opener command (open, xdg-open, start)."""

    def __init__(self, command: Sequence[str]) -> None:
        """Initialize with the opener command; the path is appended as last argument."""
        self._command = list(command)

    def __repr__(self) -> str:
        return f"CommandLauncher({self._command!r})"

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def launch(self, path: Path) -> None:
        """Spawn the opener for path.

        Raises:
            LaunchError: If the opener cannot be started
        """
        args = [*self._command, str(path)]
        try:
            # Fire and forget: the viewer's lifetime is not ours to track
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError as e:
            logger.error(f"[Launcher] Opener not found: {self._command[0]}")
            raise LaunchError(f"Opener not found: {self._command[0]}") from e
        except OSError as e:
            logger.error(f"[Launcher] Failed to open {path}: {e}")
            raise LaunchError(f"Failed to open note: {e}") from e


_PLATFORM_COMMANDS: dict[str, list[str]] = {
    "darwin": ["open"],
    "linux": ["xdg-open"],
    "win32": ["cmd", "/C", "start", ""],
}


def launcher_for_platform(platform: str = sys.platform) -> Launcher:
    """Select the launcher for a platform (sys.platform style name).

    Raises:
        LaunchError: If the platform has no known opener
    """
    for prefix, command in _PLATFORM_COMMANDS.items():
        if platform.startswith(prefix):
            return CommandLauncher(command)
    raise LaunchError(f"Unsupported platform: {platform}")


class LinkedNoteOpener:
    """Opens the note a todo links to, relative to the store root."""

    def __init__(
        self,
        launcher: Launcher,
        root_resolver: Callable[[], Path] = resolve_store_root,
    ) -> None:
        """Initialize opener.

        Args:
            launcher: Platform launcher used to open the note
            root_resolver: Returns the store root; called on every open
        """
        self._launcher = launcher
        self._root_resolver = root_resolver

    def open_linked(self, linked_note: str) -> Path:
        """Open a linked note.

        Args:
            linked_note: Note path relative to the store root

        Returns:
            Absolute path that was handed to the launcher

        Raises:
            NotFoundError: If the note does not exist
            LaunchError: If the launcher cannot be started
        """
        note_path = self._root_resolver() / linked_note
        if not note_path.exists():
            raise NotFoundError(f"Linked note not found: {note_path}")

        self._launcher.launch(note_path)
        logger.info(f"[LinkedNoteOpener] Opened {note_path}")
        return note_path
