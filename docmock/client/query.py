"""Query builder emitting where clauses in the remote wire format."""

import copy
from typing import TYPE_CHECKING, Any

from docmock.exceptions import DocumentNotFoundError
from docmock.models import (
    OBJECT_ID_ALIAS,
    Document,
    RequestEnvelope,
    RequestMethod,
    encode_reference,
)

if TYPE_CHECKING:
    from docmock.client.client import DocumentClient


class Query:
    """Builds a where clause for one collection and runs it.

    Constraint methods return the query so calls chain:
        await client.query("Item").contained_in("price", [20, 30]).find()
    """

    def __init__(self, client: "DocumentClient", collection: str) -> None:
        self._client = client
        self.collection = collection
        self._where: dict[str, Any] = {}
        self._include: list[str] = []
        self._limit: int | None = None
        self._skip = 0

    @classmethod
    def or_(cls, *queries: "Query") -> "Query":
        """Combine queries on the same collection into a disjunction."""
        if not queries:
            raise ValueError("or_ needs at least one query")
        collections = {query.collection for query in queries}
        if len(collections) != 1:
            raise ValueError(f"all queries must target one collection, got {sorted(collections)}")
        combined = cls(queries[0]._client, queries[0].collection)
        combined._where["$or"] = [query.where for query in queries]
        return combined

    @property
    def where(self) -> dict[str, Any]:
        return copy.deepcopy(self._where)

    def equal_to(self, key: str, value: Any) -> "Query":
        self._where[key] = encode_reference(value)
        return self

    def not_equal_to(self, key: str, value: Any) -> "Query":
        return self._add_operator(key, "$ne", encode_reference(value))

    def contained_in(self, key: str, values: list[Any]) -> "Query":
        return self._add_operator(key, "$in", [encode_reference(v) for v in values])

    def not_contained_in(self, key: str, values: list[Any]) -> "Query":
        return self._add_operator(key, "$nin", [encode_reference(v) for v in values])

    def matches_key_in_query(self, key: str, query_key: str, query: "Query") -> "Query":
        """Match when key equals query_key of any document query matches."""
        return self._add_operator(
            key,
            "$select",
            {"key": query_key, "query": {"className": query.collection, "where": query.where}},
        )

    def matches_query(self, key: str, query: "Query") -> "Query":
        """Match when key points at any document query matches."""
        return self._add_operator(
            key, "$inQuery", {"className": query.collection, "where": query.where}
        )

    def include(self, *paths: str) -> "Query":
        self._include.extend(paths)
        return self

    def limit(self, limit: int) -> "Query":
        self._limit = limit
        return self

    def skip(self, skip: int) -> "Query":
        self._skip = skip
        return self

    def _add_operator(self, key: str, operator: str, operand: Any) -> "Query":
        current = self._where.get(key)
        if not isinstance(current, dict) or current.get("__type"):
            current = {}
        current[operator] = operand
        self._where[key] = current
        return self

    def _envelope(self, where: dict[str, Any] | None = None, **data: Any) -> RequestEnvelope:
        payload: dict[str, Any] = {"where": self.where if where is None else where}
        if self._include:
            payload["include"] = ",".join(self._include)
        if self._skip:
            payload["skip"] = self._skip
        payload.update({key: value for key, value in data.items() if value is not None})
        return RequestEnvelope(method=RequestMethod.GET, collection=self.collection, data=payload)

    async def find(self) -> list[Document]:
        response = await self._client.request(self._envelope(limit=self._limit))
        return list(response["results"])

    async def first(self) -> Document | None:
        response = await self._client.request(self._envelope(limit=1))
        results = response["results"]
        return results[0] if results else None

    async def get(self, object_id: str) -> Document:
        """Fetch one matching document by id.

        Raises:
            DocumentNotFoundError: If no document has that id
        """
        where = {**self.where, OBJECT_ID_ALIAS: object_id}
        response = await self._client.request(self._envelope(where, limit=1))
        results = response["results"]
        if not results:
            raise DocumentNotFoundError(self.collection, object_id)
        return results[0]

    async def count(self) -> int:
        return int(await self._client.request(self._envelope(count=1, limit=0)))
