"""Include-path expansion (hydration of nested references)."""

from collections.abc import Iterable, Sequence

from docmock.models import OBJECT_TYPE, TYPE_KEY, Document
from docmock.query.identity import IdentityResolver


def split_include(include: str | Iterable[str] | None) -> list[list[str]]:
    """Split include paths into field segments.

    Accepts a comma-separated string (wire form) or a list whose entries
    may themselves be comma-separated: "item,item.brand" -> [["item"], ["item", "brand"]].
    """
    if not include:
        return []
    if isinstance(include, str):
        include = [include]
    paths = [path for entry in include if entry for path in entry.split(",")]
    return [path.strip().split(".") for path in paths if path.strip()]


class IncludeExpander:
    """Replaces references along include paths with hydrated copies.

    Copy-on-write: every hydration step builds new dicts, so neither the
    input documents nor the store's canonical documents are modified.
    """

    def __init__(self, resolver: IdentityResolver) -> None:
        self._resolver = resolver

    def expand(
        self,
        documents: Sequence[Document],
        include: str | Iterable[str] | None,
    ) -> list[Document]:
        """Expand every include path on every document, in order."""
        paths = split_include(include)
        if not paths:
            return list(documents)

        expanded = []
        for document in documents:
            for segments in paths:
                document = self._expand_path(document, segments)
            expanded.append(document)
        return expanded

    def _expand_path(self, document: Document, segments: Sequence[str]) -> Document:
        if not segments:
            return document

        head, rest = segments[0], segments[1:]
        value = document.get(head)
        if not value:
            return document

        target = self._resolver.resolve(value)
        if target is None:
            # dangling pointer stays a pointer
            return document

        hydrated = {**target, TYPE_KEY: OBJECT_TYPE}
        return {**document, head: self._expand_path(hydrated, rest)}
