"""Stored document conventions."""

from datetime import UTC, datetime
from typing import Any

ID_FIELD = "id"
OBJECT_ID_ALIAS = "objectId"
COLLECTION_FIELD = "collection"
CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"

RESERVED_FIELDS: frozenset[str] = frozenset({
    ID_FIELD,
    COLLECTION_FIELD,
    CREATED_AT_FIELD,
    UPDATED_AT_FIELD,
})

Document = dict[str, Any]


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def to_json_date(value: datetime) -> str:
    """Format a datetime the way the remote service echoes dates.

    Millisecond precision with a trailing Z, e.g. 2024-01-02T03:04:05.678Z.
    """
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def json_now() -> str:
    return to_json_date(utc_now())


def document_id(document: Document) -> Any:
    """Read a document's id, accepting the objectId alias."""
    value = document.get(ID_FIELD)
    if value is None:
        value = document.get(OBJECT_ID_ALIAS)
    return value
