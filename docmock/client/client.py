"""Document service client.

A small async client over a pluggable Transport. Against a real service
it uses HttpTransport; MockStore.start(client) swaps in the in-memory
transport so the same calls are answered locally.

Usage:
    from docmock import DocumentClient, MockStore

    client = DocumentClient()
    store = MockStore().start(client)

    item = await client.save("Item", {"price": 30})
    results = await client.query("Item").equal_to("price", 30).find()

    store.reset()
"""

import copy
from collections.abc import Mapping
from typing import Any

from docmock.client.query import Query
from docmock.config import get_settings
from docmock.models import (
    COLLECTION_FIELD,
    ID_FIELD,
    OBJECT_ID_ALIAS,
    RESERVED_FIELDS,
    NotFound,
    RequestEnvelope,
    RequestMethod,
    document_id,
    encode_reference,
)
from docmock.transport import HttpTransport, Transport


class DocumentClient:
    """Async client for a document service.

    Attributes:
        transport: Where requests are sent; replaceable at runtime
    """

    def __init__(
        self,
        base_url: str | None = None,
        application_id: str | None = None,
        rest_api_key: str | None = None,
        timeout: float | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the service, defaults to settings.client.base_url
            application_id: Application id header value
            rest_api_key: REST API key header value
            timeout: Request timeout in seconds
            transport: Explicit transport; skips building an HTTP one
        """
        if transport is None:
            config = get_settings().client
            transport = HttpTransport(
                base_url=base_url or config.base_url,
                application_id=application_id or config.application_id,
                rest_api_key=rest_api_key or config.rest_api_key,
                timeout=timeout or config.timeout,
            )
        self.transport = transport

    async def __aenter__(self) -> "DocumentClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.transport.close()

    async def request(self, envelope: RequestEnvelope) -> Any:
        return await self.transport.request(envelope)

    async def save(self, collection: str, document: Mapping[str, Any]) -> dict[str, Any]:
        """Create or update a document.

        The full field set is sent; the service's acknowledgement is merged
        into a copy of the document, which is returned.
        """
        object_id = document_id(document)
        data = {
            key: encode_reference(value)
            for key, value in document.items()
            if key not in RESERVED_FIELDS and key != OBJECT_ID_ALIAS
        }
        envelope = RequestEnvelope(
            method=RequestMethod.POST if object_id is None else RequestMethod.PUT,
            collection=collection,
            object_id=str(object_id) if object_id is not None else None,
            data=data,
        )
        ack = await self.request(envelope)

        saved = copy.deepcopy(dict(document))
        saved.pop(OBJECT_ID_ALIAS, None)
        saved.update(ack)
        saved[COLLECTION_FIELD] = collection
        if object_id is not None:
            saved[ID_FIELD] = str(object_id)
        return saved

    async def fetch(self, collection: str, object_id: str) -> dict[str, Any] | NotFound:
        """Fetch one document by id; a missing one is a NotFound result."""
        envelope = RequestEnvelope(
            method=RequestMethod.GET, collection=collection, object_id=object_id
        )
        return await self.request(envelope)

    def query(self, collection: str) -> Query:
        """Start a query against a collection."""
        return Query(self, collection)
