"""WebSocket endpoint for todo change notifications."""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from journal_todos.factory import get_broadcaster

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def todo_events(websocket: WebSocket) -> None:
    """Stream {"type": event, "path": record} messages to a todo window.

    The client may send "ping" and gets "pong" back; anything else is ignored.
    """
    broadcaster = get_broadcaster()
    await broadcaster.connect(websocket)
    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"[WebSocket] Ignoring client message: {data}")
    except WebSocketDisconnect:
        logger.info("[WebSocket] Window closed")
    except Exception as e:
        logger.error(f"[WebSocket] Error: {e}", exc_info=True)
    finally:
        broadcaster.disconnect(websocket)
