"""Tests for linked note opening and platform launchers."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from journal_todos.journal.errors import LaunchError, NotFoundError
from journal_todos.launcher.opener import CommandLauncher, LinkedNoteOpener, launcher_for_platform


def test_open_linked_note(journal_root: Path) -> None:
    """Test that an existing note is handed to the launcher."""
    note = journal_root / "2025" / "01" / "2025-01-01.md"
    note.parent.mkdir(parents=True)
    note.write_text("# Wednesday\n")
    launcher = MagicMock()

    opened = LinkedNoteOpener(launcher).open_linked("2025/01/2025-01-01.md")

    assert opened == note
    launcher.launch.assert_called_once_with(note)


def test_open_linked_note_missing(journal_root: Path) -> None:
    """Test that a dangling link raises NotFoundError without launching."""
    launcher = MagicMock()

    with pytest.raises(NotFoundError, match="Linked note not found"):
        LinkedNoteOpener(launcher).open_linked("2025/01/deleted.md")

    launcher.launch.assert_not_called()


def test_open_linked_note_uses_given_root(tmp_path: Path) -> None:
    """Test that the note is resolved against the resolver's root."""
    note = tmp_path / "note.md"
    note.write_text("note")
    launcher = MagicMock()

    LinkedNoteOpener(launcher, root_resolver=lambda: tmp_path).open_linked("note.md")

    launcher.launch.assert_called_once_with(note)


def test_open_linked_note_launch_error(journal_root: Path) -> None:
    """Test that launcher failures surface as LaunchError."""
    (journal_root / "note.md").write_text("note")
    launcher = MagicMock()
    launcher.launch.side_effect = LaunchError("Opener not found: xdg-open")

    with pytest.raises(LaunchError):
        LinkedNoteOpener(launcher).open_linked("note.md")


def test_command_launcher_spawns_without_waiting(tmp_path: Path) -> None:
    """Test that the opener command is spawned with the path appended."""
    note = tmp_path / "note.md"

    with patch("journal_todos.launcher.opener.subprocess.Popen") as popen:
        CommandLauncher(["xdg-open"]).launch(note)

    popen.assert_called_once_with(
        ["xdg-open", str(note)],
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    popen.return_value.wait.assert_not_called()


def test_command_launcher_missing_binary(tmp_path: Path) -> None:
    """Test that a missing opener binary raises LaunchError."""
    with patch(
        "journal_todos.launcher.opener.subprocess.Popen",
        side_effect=FileNotFoundError("xdg-open"),
    ):
        with pytest.raises(LaunchError, match="Opener not found"):
            CommandLauncher(["xdg-open"]).launch(tmp_path / "note.md")


@pytest.mark.parametrize(
    ("platform", "command"),
    [
        ("darwin", ["open"]),
        ("linux", ["xdg-open"]),
        ("win32", ["cmd", "/C", "start", ""]),
    ],
)
def test_launcher_for_platform(platform: str, command: list[str]) -> None:
    """Test launcher selection per platform."""
    launcher = launcher_for_platform(platform)

    assert isinstance(launcher, CommandLauncher)
    assert launcher.command == command


def test_launcher_for_unsupported_platform() -> None:
    """Test that an unknown platform has no launcher."""
    with pytest.raises(LaunchError, match="Unsupported platform"):
        launcher_for_platform("sunos5")
