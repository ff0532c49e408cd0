"""Read pipeline: find, first, get and count.

Each operation runs synchronously to completion; the async methods exist
so callers await results exactly as they would against the remote service.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from docmock.models import OBJECT_ID_ALIAS, Document, NotFound
from docmock.observability.logging import get_logger
from docmock.query import IdentityResolver, IncludeExpander, PredicateMatcher
from docmock.store import CollectionStore

logger = get_logger(__name__)

Include = str | Iterable[str] | None


class ReadPipeline:
    """Scan, filter, then hydrate includes; results keep insertion order."""

    def __init__(self, store: CollectionStore, resolver: IdentityResolver) -> None:
        self._store = store
        self._matcher = PredicateMatcher(resolver, self._run_subquery)
        self._expander = IncludeExpander(resolver)

    async def find(
        self,
        collection: str,
        where: Mapping[str, Any] | None = None,
        include: Include = None,
        *,
        limit: int | None = None,
        skip: int = 0,
    ) -> list[Document]:
        """Return every matching document, hydrated along include paths."""
        return self.find_sync(collection, where, include, limit=limit, skip=skip)

    async def first(
        self,
        collection: str,
        where: Mapping[str, Any] | None = None,
        include: Include = None,
    ) -> Document | None:
        """Return the first-inserted matching document, or None."""
        results = self.find_sync(collection, where, include, limit=1)
        return results[0] if results else None

    async def get(
        self,
        collection: str,
        object_id: str,
        include: Include = None,
    ) -> Document | NotFound:
        """Look up one document by id.

        A missing document is a resolved NotFound result, not an exception.
        """
        results = self.find_sync(collection, {OBJECT_ID_ALIAS: object_id}, include, limit=1)
        if not results:
            logger.debug("document_not_found", collection=collection, object_id=object_id)
            return NotFound(collection=collection, object_id=str(object_id))
        return results[0]

    async def count(self, collection: str, where: Mapping[str, Any] | None = None) -> int:
        """Count matches; include paths are irrelevant to a count."""
        return self.count_sync(collection, where)

    def find_sync(
        self,
        collection: str,
        where: Mapping[str, Any] | None = None,
        include: Include = None,
        *,
        limit: int | None = None,
        skip: int = 0,
    ) -> list[Document]:
        matches = self._filter(collection, where)
        if skip:
            matches = matches[skip:]
        if limit is not None:
            matches = matches[: max(limit, 0)]
        results = self._expander.expand(matches, include)
        logger.debug("query_executed", collection=collection, matches=len(results))
        return results

    def count_sync(self, collection: str, where: Mapping[str, Any] | None = None) -> int:
        return len(self._filter(collection, where))

    def _filter(self, collection: str, where: Mapping[str, Any] | None) -> list[Document]:
        predicate = self._matcher.build(where)
        return [document for document in self._store.scan(collection) if predicate(document)]

    def _run_subquery(self, collection: str, where: Mapping[str, Any] | None) -> list[Document]:
        return self.find_sync(collection, where)
