"""Codec for todo record files (YAML frontmatter + markdown body).

On-disk layout::

    ---
    <yaml header>
    ---

    <body>
"""

import logging
from typing import Any

import yaml
from pydantic import ValidationError

from journal_todos.journal.errors import HeaderParseError, MalformedRecordError
from journal_todos.journal.models import TodoFrontmatter

logger = logging.getLogger(__name__)

HEADER_DELIMITER = "---"
RECORD_EXTENSION = ".md"

_OPTIONAL_FIELDS = frozenset(
    name for name, field in TodoFrontmatter.model_fields.items() if not field.is_required()
)

_YAML_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _HeaderLoader(yaml.SafeLoader):
    """SafeLoader that reads unquoted timestamps as the strings they were written as."""


_HeaderLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def decode(raw: bytes | str) -> tuple[TodoFrontmatter, str]:
    """Parse a record into its frontmatter and trimmed body.

    Only the first two delimiters frame the header; anything before the
    first one is discarded and later occurrences belong to the body.

    Raises:
        MalformedRecordError: If fewer than two delimiters are present
        HeaderParseError: If the header is invalid YAML or misses required fields
    """
    text = _to_text(raw)

    parts = text.split(HEADER_DELIMITER, 2)
    if len(parts) < 3:
        raise MalformedRecordError(
            f"Expected two '{HEADER_DELIMITER}' delimiters, found {len(parts) - 1}"
        )

    _, header_text, rest = parts
    return parse_header(header_text), _extract_body(rest)


def encode(header: TodoFrontmatter, body: str) -> bytes:
    """Serialize frontmatter and body back to record bytes."""
    data = {
        key: value
        for key, value in header.model_dump().items()
        if not (key in _OPTIONAL_FIELDS and value is None)
    }
    header_yaml = yaml.safe_dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True
    )
    content = f"{HEADER_DELIMITER}\n{header_yaml}{HEADER_DELIMITER}\n\n{body.strip()}\n"
    return content.encode("utf-8")


def parse_header(header_text: str) -> TodoFrontmatter:
    """Parse the YAML block between the delimiters."""
    try:
        data: Any = yaml.load(header_text, Loader=_HeaderLoader)
    except yaml.YAMLError as e:
        raise HeaderParseError(f"Invalid YAML in todo frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise HeaderParseError("Todo frontmatter is not a mapping")

    try:
        return TodoFrontmatter.model_validate(data)
    except ValidationError as e:
        raise HeaderParseError(f"Failed to parse todo frontmatter: {e}") from e


def title_of(body: str) -> str:
    """Return the first non-blank line of a body, or an empty string."""
    for line in body.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _extract_body(rest: str) -> str:
    """Drop the line break that closes the header delimiter, then trim."""
    if rest.startswith("\r\n"):
        rest = rest[2:]
    elif rest.startswith("\n"):
        rest = rest[1:]
    return rest.strip()


def _to_text(raw: bytes | str) -> str:
    if isinstance(raw, str):
        return raw
    # Try UTF-8 first, fallback to latin-1 for non-UTF-8 files
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("[Record] Record is not valid UTF-8, decoding as latin-1")
        return raw.decode("latin-1")
