"""Store root resolution from the file-journal config."""

import logging
import tomllib
from pathlib import Path

from journal_todos.journal.errors import ConfigParseError, HomeDirUnavailable, StoreIOError

logger = logging.getLogger(__name__)

CONFIG_RELATIVE_PATH = Path(".config") / "file-journal" / "config.toml"
DEFAULT_ROOT_RELATIVE_PATH = Path("Documents") / "journals"


def home_dir() -> Path:
    """Return the user's home directory.

    Raises:
        HomeDirUnavailable: If the platform cannot determine it
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirUnavailable("Could not determine home directory") from e


def config_file_path() -> Path:
    """Return the location of the external file-journal config."""
    return home_dir() / CONFIG_RELATIVE_PATH


def default_store_root() -> Path:
    """Return the fallback store root (~/Documents/journals)."""
    return home_dir() / DEFAULT_ROOT_RELATIVE_PATH


def resolve_store_root() -> Path:
    """Resolve the journal store root.

    The config file is read on every call so edits apply immediately.
    A missing config file is normal and yields the default root; a config
    file that exists but cannot be parsed is an error.

    Returns:
        `default_path` from the config verbatim, or the default root

    Raises:
        HomeDirUnavailable: If no home directory is available
        ConfigParseError: If the config file is not valid TOML
        StoreIOError: If the config file exists but cannot be read
    """
    cfg_path = config_file_path()
    if not cfg_path.exists():
        return default_store_root()

    try:
        content = cfg_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StoreIOError(f"Failed to read {cfg_path}: {e}") from e

    try:
        value = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Failed to parse file-journal config {cfg_path}: {e}") from e

    default_path = value.get("default_path")
    if isinstance(default_path, str):
        return Path(default_path)

    logger.debug(f"[StoreRoot] No default_path in {cfg_path}, using default root")
    return default_store_root()
