"""Run the journal-todos command bridge for the tray UI."""

import logging
import sys

import uvicorn

from journal_todos.factory import create_app, get_config, get_launcher
from journal_todos.journal.errors import StoreError


def main() -> int:
    """Serve the bridge on localhost until interrupted."""
    config = get_config()

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Pick the note launcher up front so an unsupported platform fails fast
    try:
        launcher = get_launcher()
    except StoreError as e:
        logging.error(f"[Main] {e}")
        return 1
    logging.info(f"[Main] Using launcher {launcher!r}")

    uvicorn.run(
        create_app(),
        host=config.host,
        port=config.port,
        log_level=config.log_level,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
