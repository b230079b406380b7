"""Tests for TodoEventBroadcaster."""

import json
from unittest.mock import AsyncMock

import pytest

from journal_todos.websocket.broadcaster import TodoEventBroadcaster


@pytest.mark.asyncio
async def test_notify_changed_reaches_all_windows() -> None:
    """Test that change events are sent to every connected window."""
    broadcaster = TodoEventBroadcaster()
    first, second = AsyncMock(), AsyncMock()
    await broadcaster.connect(first)
    await broadcaster.connect(second)

    await broadcaster.notify_changed("modified", "/j/todos/a.md")

    expected = json.dumps({"type": "modified", "path": "/j/todos/a.md"})
    first.send_text.assert_awaited_once_with(expected)
    second.send_text.assert_awaited_once_with(expected)


@pytest.mark.asyncio
async def test_dead_windows_are_dropped() -> None:
    """Test that a window failing to receive is disconnected."""
    broadcaster = TodoEventBroadcaster()
    alive, dead = AsyncMock(), AsyncMock()
    dead.send_text.side_effect = RuntimeError("closed")
    await broadcaster.connect(alive)
    await broadcaster.connect(dead)

    await broadcaster.notify_changed("deleted", "/j/todos/a.md")

    assert broadcaster.active_connections == [alive]


@pytest.mark.asyncio
async def test_notify_without_windows() -> None:
    """Test that notifying with no windows is a no-op."""
    broadcaster = TodoEventBroadcaster()

    await broadcaster.notify_changed("created", "/j/todos/a.md")

    assert broadcaster.active_connections == []
