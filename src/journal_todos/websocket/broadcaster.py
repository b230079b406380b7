"""Push todo change events to connected UI windows."""

import json
import logging

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class TodoEventBroadcaster:
    """Tracks open todo windows and tells them when records change on disk."""

    def __init__(self) -> None:
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        """Accept and register a UI window."""
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"[Broadcaster] Window connected (total: {len(self.active_connections)})")

    def disconnect(self, websocket: WebSocket) -> None:
        """Forget a UI window."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info(
                f"[Broadcaster] Window disconnected (total: {len(self.active_connections)})"
            )

    async def notify_changed(self, event_type: str, todo_path: str) -> None:
        """Tell every window that a record was created, modified, moved or deleted.

        Windows that can no longer receive are disconnected.
        """
        if not self.active_connections:
            logger.debug(f"[Broadcaster] No windows open for {event_type} {todo_path}")
            return

        payload = json.dumps({"type": event_type, "path": todo_path})
        for window in list(self.active_connections):
            try:
                await window.send_text(payload)
            except Exception as e:
                logger.warning(f"[Broadcaster] Dropping window after failed {event_type}: {e}")
                self.disconnect(window)
