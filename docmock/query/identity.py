"""Identity resolution across pointer, embedded and raw-pair references."""

from typing import Any

from docmock.models import Document, Embedded, as_reference
from docmock.store import CollectionStore


def _is_bare_id(value: Any) -> bool:
    return isinstance(value, str | int) and not isinstance(value, bool)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    if isinstance(value, str) and value.strip() and "_" not in value:
        try:
            return float(value)
        except ValueError:
            return None
    return None


def loosely_equal(a: Any, b: Any) -> bool:
    """Scalar equality that also matches a number against its numeric string.

    Matches 30 against "30" or "30.0". Two strings, booleans and
    non-numeric strings compare strictly.
    """
    if a == b:
        return True
    if isinstance(a, str) == isinstance(b, str):
        return False
    number_a, number_b = _as_number(a), _as_number(b)
    return number_a is not None and number_b is not None and number_a == number_b


class IdentityResolver:
    """Resolves references to stored documents and compares identities.

    Every representation of a document (thin pointer, hydrated copy,
    collection/id pair, the stored document itself) normalizes to the same
    (collection, id) identity, so comparisons are symmetric and transitive.
    """

    def __init__(self, store: CollectionStore) -> None:
        self._store = store

    def resolve(self, value: Any) -> Document | None:
        """Return the stored document a reference names.

        Hydrated documents are returned unchanged without a lookup.
        Returns None when value is not a reference or names nothing stored;
        callers treat that as "no match".
        """
        reference = as_reference(value)
        if reference is None:
            return None
        if isinstance(reference, Embedded):
            return value if isinstance(value, dict) else reference.document
        collection, object_id = reference.identity
        return self._store.get(collection, object_id)

    def identity_of(self, value: Any) -> tuple[str, str] | None:
        reference = as_reference(value)
        if reference is None:
            return None
        return reference.identity

    def references_equal(self, a: Any, b: Any, *, strict: bool = False) -> bool:
        """Decide whether two values denote the same document.

        Handles pointers, hydrated documents and raw pairs in any
        combination, a bare id against any reference, and falls back to
        loose scalar equality (strict when asked). A missing side never
        matches.
        """
        if a is None or b is None:
            return False

        identity_a = self.identity_of(a)
        identity_b = self.identity_of(b)

        if identity_a is not None and identity_b is not None:
            return identity_a == identity_b
        if identity_a is not None and _is_bare_id(b):
            return identity_a[1] == str(b)
        if identity_b is not None and _is_bare_id(a):
            return identity_b[1] == str(a)
        if strict:
            return bool(a == b)
        return loosely_equal(a, b)

    def to_pointer(self, value: Any) -> dict[str, Any] | None:
        """Canonical stored pointer for any reference shape, or None."""
        reference = as_reference(value)
        if reference is None:
            return None
        if isinstance(reference, Embedded) and reference.identity is None:
            return None
        return reference.to_wire()
