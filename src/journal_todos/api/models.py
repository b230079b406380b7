"""API models for journal-todos."""

from pydantic import BaseModel

from journal_todos.journal.models import TodoSummary


class TodoResponse(BaseModel):
    """API response model for todos."""

    path: str
    id: str
    text: str
    linked_note: str
    status: str
    priority: str | None
    due: str | None
    created: str | None

    @classmethod
    def from_summary(cls, summary: TodoSummary) -> "TodoResponse":
        return cls(
            path=summary.path,
            id=summary.id,
            text=summary.text,
            linked_note=summary.linked_note,
            status=summary.status,
            priority=summary.priority,
            due=summary.due,
            created=summary.created,
        )


class SetStatusRequest(BaseModel):
    """Request model for changing a todo's status."""

    path: str
    status: str


class OpenNoteRequest(BaseModel):
    """Request model for opening a linked note."""

    linked_note: str


class StoreResponse(BaseModel):
    """Resolved store location."""

    root: str
    todos_dir: str
    todos_dir_exists: bool


class DependencyStatus(BaseModel):
    """Availability of the external journal tools on PATH."""

    journal_ai: bool
    file_journal: bool
