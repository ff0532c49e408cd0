"""CollectionStore abstract interface."""

from abc import ABC, abstractmethod

from docmock.models import Document


class CollectionStore(ABC):
    """Abstract interface for collection storage.

    Maps collection names to documents kept in insertion order. Documents
    handed out by a store are copies; callers may mutate them freely.
    """

    @abstractmethod
    def insert(self, collection: str, document: Document) -> None:
        """Append a document to a collection."""
        pass

    @abstractmethod
    def replace(self, collection: str, object_id: str, document: Document) -> None:
        """Replace the document with object_id in place, appending if absent."""
        pass

    @abstractmethod
    def scan(self, collection: str) -> list[Document]:
        """Return copies of every document in insertion order."""
        pass

    @abstractmethod
    def get(self, collection: str, object_id: str) -> Document | None:
        """Return a copy of one document by id."""
        pass

    @abstractmethod
    def contains(self, collection: str, object_id: str) -> bool:
        """Check whether an id is taken within a collection."""
        pass

    @abstractmethod
    def collections(self) -> list[str]:
        """List collection names that hold at least one document."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every collection."""
        pass
