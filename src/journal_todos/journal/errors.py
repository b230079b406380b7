"""Errors raised by the journal todo store."""


class StoreError(Exception):
    """Base class for every todo store failure."""


class ConfigError(StoreError):
    """Store root could not be resolved."""


class HomeDirUnavailable(ConfigError):
    """Platform could not supply a home directory."""


class ConfigParseError(ConfigError):
    """External config file exists but is not valid TOML."""


class DecodeError(StoreError, ValueError):
    """Record file could not be decoded."""


class MalformedRecordError(DecodeError):
    """Record is missing its frontmatter delimiters."""


class HeaderParseError(DecodeError):
    """Frontmatter is not valid YAML or lacks required fields."""


class StoreIOError(StoreError):
    """Read, write or rename failure on the filesystem."""


class NotFoundError(StoreError, FileNotFoundError):
    """Record or linked note does not exist."""


class LaunchError(StoreError, RuntimeError):
    """External opener could not be started."""
