"""Configuration for journal-todos."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Command bridge configuration, read from JOURNAL_TODOS_* variables.

    The store root is not part of it: it comes from the file-journal
    config and is resolved again on every store operation.
    """

    model_config = SettingsConfigDict(env_prefix="JOURNAL_TODOS_")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8765)
    log_level: str = Field(default="info")
    skip_malformed: bool = Field(default=False)
