"""Todo API endpoints."""

import asyncio
import logging
import shutil
from pathlib import Path

from fastapi import APIRouter, HTTPException

from journal_todos.api.models import (
    DependencyStatus,
    OpenNoteRequest,
    SetStatusRequest,
    StoreResponse,
    TodoResponse,
)
from journal_todos.factory import get_note_opener, get_todo_store
from journal_todos.journal.errors import (
    DecodeError,
    LaunchError,
    NotFoundError,
    StoreError,
)
from journal_todos.journal.todo_store import JournalTodoStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/todos", response_model=list[TodoResponse])
async def list_todos(status: str | None = None) -> list[TodoResponse]:
    """List todos from the journal, newest first.

    Args:
        status: Comma-separated list of statuses to filter (default: pending only)

    Returns:
        List of todos matching the filter
    """
    store = get_todo_store()
    try:
        if status:
            status_filter = [s.strip() for s in status.split(",")]
            todos = await asyncio.to_thread(store.list_todos, status_filter)
        else:
            todos = await asyncio.to_thread(store.list_pending)
    except DecodeError as e:
        logger.error(f"Failed to load todos: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e
    except StoreError as e:
        logger.exception(f"Failed to load todos: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return [TodoResponse.from_summary(todo) for todo in todos]


@router.patch("/todos/status")
async def set_todo_status(request: SetStatusRequest) -> dict[str, str]:
    """Update a todo's status in its frontmatter.

    Args:
        request: Record path and new status

    Returns:
        Success message

    Raises:
        HTTPException: If the path is outside the todos folder, the record is
            missing or malformed, or the write fails
    """
    store = get_todo_store()
    try:
        await asyncio.to_thread(_set_status_in_todos, store, Path(request.path), request.status)
        return {"status": "success", "path": request.path, "todo_status": request.status}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except DecodeError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except StoreError as e:
        logger.exception(f"Error updating todo status: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


def _set_status_in_todos(store: JournalTodoStore, todo_path: Path, new_status: str) -> None:
    """Set a status, refusing records outside the store's todos folder."""
    if not todo_path.resolve().is_relative_to(store.todos_dir().resolve()):
        raise HTTPException(status_code=400, detail=f"Not a todo path: {todo_path}")
    store.set_status(todo_path, new_status)


@router.post("/notes/open")
async def open_linked_note(request: OpenNoteRequest) -> dict[str, str]:
    """Open the note a todo links to in the default application.

    Args:
        request: Note path relative to the store root

    Returns:
        Success message with the opened path

    Raises:
        HTTPException: If the note is missing or cannot be opened
    """
    try:
        opener = get_note_opener()
        note_path = await asyncio.to_thread(opener.open_linked, request.linked_note)
        return {"status": "success", "path": str(note_path)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except LaunchError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    except StoreError as e:
        logger.exception(f"Error opening linked note: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.get("/store", response_model=StoreResponse)
async def get_store() -> StoreResponse:
    """Show where the todo store currently resolves to."""
    store = get_todo_store()
    try:
        todos_dir = store.todos_dir()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return StoreResponse(
        root=str(todos_dir.parent),
        todos_dir=str(todos_dir),
        todos_dir_exists=todos_dir.is_dir(),
    )


@router.get("/dependencies", response_model=DependencyStatus)
async def check_dependencies() -> DependencyStatus:
    """Report whether the external journal tools are installed."""
    return DependencyStatus(
        journal_ai=shutil.which("journal-ai") is not None,
        file_journal=shutil.which("file-journal") is not None,
    )
