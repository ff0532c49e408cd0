"""Transport abstract interface."""

from abc import ABC, abstractmethod
from typing import Any

from docmock.models import RequestEnvelope


class Transport(ABC):
    """Carries a request envelope to a document service.

    Responses use the remote service's JSON shapes: {"results": [...]}
    for finds, an integer for counts, a bare acknowledgement for saves and
    a list of {"success": ...} entries for batches.
    """

    @abstractmethod
    async def request(self, envelope: RequestEnvelope) -> Any:
        """Send one request and return the decoded response payload."""
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
