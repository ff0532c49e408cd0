"""Transport that answers from an in-process dispatcher."""

from typing import Any

from docmock.dispatcher import RequestDispatcher
from docmock.models import RequestEnvelope
from docmock.transport.base import Transport


class InMemoryTransport(Transport):
    """Routes envelopes straight into a RequestDispatcher, no network."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher

    async def request(self, envelope: RequestEnvelope) -> Any:
        return await self._dispatcher.handle(envelope)
