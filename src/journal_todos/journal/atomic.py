"""Atomic file replacement."""

import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path

from journal_todos.journal.errors import StoreIOError

logger = logging.getLogger(__name__)


def write_atomic(path: Path, data: bytes) -> None:
    """Write data to path so readers see either the old or the new content.

    The data goes to a temporary file next to the target, which is then
    renamed over it. The target keeps its permission bits; a new file gets
    the mode a plain write would create. The temporary file is removed
    unless the rename succeeds.

    Raises:
        StoreIOError: If writing or renaming fails
    """
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
    except OSError as e:
        raise StoreIOError(f"Failed to create temporary file next to {path}: {e}") from e

    replaced = False
    try:
        with os.fdopen(fd, "wb") as tmp_handle:
            tmp_handle.write(data)
            tmp_handle.flush()
            os.fsync(tmp_handle.fileno())
        # mkstemp creates 0600 files
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
        replaced = True
    except OSError as e:
        raise StoreIOError(f"Failed to write {path}: {e}") from e
    finally:
        if not replaced:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)

    logger.debug(f"[AtomicWriter] Wrote {len(data)} bytes to {path}")


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
