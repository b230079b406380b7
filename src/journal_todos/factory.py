"""Dependency injection factory."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from journal_todos.config import Config
from journal_todos.journal.errors import StoreError
from journal_todos.journal.todo_store import JournalTodoStore
from journal_todos.journal.todo_watcher import TodoWatcher
from journal_todos.launcher.opener import Launcher, LinkedNoteOpener, launcher_for_platform
from journal_todos.websocket.broadcaster import TodoEventBroadcaster

logger = logging.getLogger(__name__)

# Global config instance for dependency injection
_config: Config | None = None

# Platform launcher, selected once at startup
_launcher: Launcher | None = None

# Global broadcaster and watcher
_broadcaster: TodoEventBroadcaster | None = None
_watcher: TodoWatcher | None = None


def get_config() -> Config:
    """Get or create Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_todo_store() -> JournalTodoStore:
    """Create todo store; the store root is resolved per operation."""
    config = get_config()
    return JournalTodoStore(skip_malformed=config.skip_malformed)


def get_launcher() -> Launcher:
    """Get or select the launcher for the running platform."""
    global _launcher
    if _launcher is None:
        _launcher = launcher_for_platform()
    return _launcher


def get_note_opener() -> LinkedNoteOpener:
    """Create LinkedNoteOpener for dependency injection."""
    return LinkedNoteOpener(get_launcher())


def get_broadcaster() -> TodoEventBroadcaster:
    """Get or create TodoEventBroadcaster singleton."""
    global _broadcaster
    if _broadcaster is None:
        _broadcaster = TodoEventBroadcaster()
    return _broadcaster


def start_todo_watcher() -> None:
    """Start the file watcher on the todos folder of the current store root."""
    global _watcher
    broadcaster = get_broadcaster()

    # Get the running event loop to schedule coroutines from threads
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.error("[Factory] No running event loop found")
        return

    try:
        todos_dir = get_todo_store().todos_dir()
    except StoreError as e:
        logger.error(f"[Factory] Cannot resolve store root, not watching: {e}")
        return

    if not todos_dir.exists():
        logger.warning(f"[Factory] Todos folder not found: {todos_dir}")
        return

    def on_todo_event(event_type: str, todo_path: str) -> None:
        # Runs on the observer thread; hop onto the event loop
        asyncio.run_coroutine_threadsafe(broadcaster.notify_changed(event_type, todo_path), loop)

    watcher = TodoWatcher(todos_dir, on_todo_event)
    try:
        watcher.start()
    except OSError as e:
        logger.error(f"[Factory] Failed to watch {todos_dir}: {e}", exc_info=True)
        return
    _watcher = watcher


def stop_todo_watcher() -> None:
    """Stop the running file watcher."""
    global _watcher
    watcher, _watcher = _watcher, None
    if watcher is not None:
        watcher.stop()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle - startup and shutdown."""
    logger.info("[Lifespan] Starting todo watcher...")
    start_todo_watcher()
    try:
        yield
    finally:
        logger.info("[Lifespan] Stopping todo watcher...")
        stop_todo_watcher()


def create_app() -> FastAPI:
    """Create FastAPI application (composition root)."""
    from journal_todos.api.todos import router as todos_router
    from journal_todos.api.websocket import router as ws_router

    app = FastAPI(
        title="journal-todos",
        description="Pending todos from the file journal",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Mount API routes
    app.include_router(todos_router, prefix="/api")
    app.include_router(ws_router)  # WebSocket at /ws

    return app
