"""Todo record models."""

from dataclasses import dataclass
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class TodoFrontmatter(BaseModel):
    """YAML header of a todo record.

    Unknown keys are kept as extras so a rewrite never drops them.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    linked_note: str  # Relative to the store root, may point to a deleted note
    created: str | None = None
    updated: str | None = None
    status: str  # Open string: pending, done, cancelled, ...
    completed: str | None = None
    due: str | None = None
    priority: str | None = None
    tags: list[str] | None = None

    @field_validator("created", "updated", "completed", "due", mode="before")
    @classmethod
    def _date_to_string(cls, value: Any) -> Any:
        """Accept date/datetime values given in code as ISO strings."""
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Any:
        """Accept numeric priorities (priority: 1) as their string form."""
        # bool is a subclass of int, leave it for validation to reject
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


@dataclass(frozen=True)
class TodoSummary:
    """Read-only listing projection of a todo record."""

    path: str  # Absolute path of the record file
    id: str
    text: str  # First non-blank body line
    linked_note: str
    status: str
    priority: str | None
    due: str | None
    created: str | None
