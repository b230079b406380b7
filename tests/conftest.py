"""Test fixtures for journal-todos."""

from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_TODO = """---
id: 20250101-093000-call-dentist
linked_note: 2025/01/2025-01-01.md
created: '2025-01-01T09:30:00Z'
status: pending
due: '2025-01-05'
priority: high
tags:
- health
---

Call the dentist
Ask about the appointment next week.
"""


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temporary folder."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def journal_root(home: Path) -> Path:
    """Create the default journal root (~/Documents/journals) with a todos folder."""
    root = home / "Documents" / "journals"
    (root / "todos").mkdir(parents=True)
    return root


@pytest.fixture
def todos_dir(journal_root: Path) -> Path:
    """Todos folder of the default journal root."""
    return journal_root / "todos"


@pytest.fixture
def write_todo(todos_dir: Path) -> Callable[..., Path]:
    """Return a helper that writes a todo record into the todos folder."""

    def _write(name: str, status: str = "pending", body: str = "Do the thing") -> Path:
        path = todos_dir / name
        path.write_text(
            f"---\nid: {Path(name).stem}\nlinked_note: notes/{Path(name).stem}.md\n"
            f"status: {status}\n---\n\n{body}\n",
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def sample_todo_file(todos_dir: Path) -> Path:
    """Create a sample pending todo with full metadata."""
    todo_file = todos_dir / "20250101-093000-call-dentist.md"
    todo_file.write_text(SAMPLE_TODO, encoding="utf-8")
    return todo_file
