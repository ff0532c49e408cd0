"""MockStore: an in-memory stand-in for a remote document service.

Owns one collection store, hook registry and pair of pipelines. Clients
are pointed at it by injecting its transport, and reset() puts every
client back the way it was.

Usage:
    store = MockStore()
    store.start(client)
    ...
    store.reset()
"""

from collections.abc import Mapping
from typing import Any

from docmock.client import DocumentClient
from docmock.config import Settings, get_settings
from docmock.dispatcher import RequestDispatcher
from docmock.hooks import HookRegistry, HookType, PreSaveHook
from docmock.models import COLLECTION_FIELD, RequestEnvelope
from docmock.observability.logging import get_logger, setup_logging_from_settings
from docmock.pipelines import ReadPipeline, WritePipeline
from docmock.query import IdentityResolver
from docmock.store import CollectionStore, InMemoryCollectionStore
from docmock.transport import InMemoryTransport, Transport

logger = get_logger(__name__)


class MockStore:
    """Public facade over the in-memory document service."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: CollectionStore | None = None,
        configure_logging: bool = False,
    ) -> None:
        """Build a store.

        Args:
            settings: Configuration, defaults to get_settings()
            store: Backing collection store, defaults to an in-memory one
            configure_logging: Apply settings.logging to structlog; off by
                default so a host test suite keeps its own logging setup
        """
        settings = settings or get_settings()
        if configure_logging:
            setup_logging_from_settings(settings)
        self.store = store or InMemoryCollectionStore()
        self.hooks = HookRegistry()

        resolver = IdentityResolver(self.store)
        self.reader = ReadPipeline(self.store, resolver)
        self.writer = WritePipeline(
            self.store, resolver, self.hooks, id_length=settings.store.id_length
        )
        self.dispatcher = RequestDispatcher(self.reader, self.writer)
        self.transport = InMemoryTransport(self.dispatcher)
        self._replaced: list[tuple[DocumentClient, Transport]] = []

    def __enter__(self) -> "MockStore":
        return self

    def __exit__(self, *args: Any) -> None:
        self.reset()

    def start(self, *clients: DocumentClient) -> "MockStore":
        """Route each client's requests into this store.

        Calling start again for an already routed client is a no-op.
        """
        for client in clients:
            if any(client is routed for routed, _ in self._replaced):
                continue
            self._replaced.append((client, client.transport))
            client.transport = self.transport
        logger.debug("mock_store_started", clients=len(self._replaced))
        return self

    def client(self) -> DocumentClient:
        """Build a client already routed into this store."""
        return DocumentClient(transport=self.transport)

    def reset(self) -> None:
        """Clear all collections and hooks and restore client transports."""
        self.store.clear()
        self.hooks.clear()
        for client, original in reversed(self._replaced):
            client.transport = original
        self._replaced.clear()
        logger.debug("mock_store_reset")

    def register_pre_save_hook(self, collection: str, handler: PreSaveHook) -> None:
        self.hooks.register(collection, HookType.BEFORE_SAVE, handler)

    def register_hook(self, collection: str, hook_type: str, handler: PreSaveHook) -> None:
        """Register a hook by kind name.

        Raises:
            UnsupportedHookTypeError: For any kind other than beforeSave
        """
        self.hooks.register(collection, hook_type, handler)

    async def handle(self, request: RequestEnvelope | Mapping[str, Any]) -> Any:
        """Answer one request envelope."""
        return await self.dispatcher.handle(request)

    def save_sync(self, collection: str, document: Mapping[str, Any]) -> dict[str, Any]:
        """Seed a document synchronously, bypassing hooks.

        Returns the document merged with its acknowledgement.
        """
        ack = self.writer.save_sync(collection, document)
        return {**document, **ack, COLLECTION_FIELD: collection}
