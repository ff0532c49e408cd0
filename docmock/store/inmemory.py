"""In-memory implementation of CollectionStore."""

import copy

from docmock.models import ID_FIELD, Document
from docmock.store.base import CollectionStore


class InMemoryCollectionStore(CollectionStore):
    """In-memory implementation of CollectionStore.

    Uses a list per collection with linear scan for lookups. Every read
    returns a deep copy so include expansion can never reach the
    canonical documents.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._collections: dict[str, list[Document]] = {}

    def insert(self, collection: str, document: Document) -> None:
        self._collections.setdefault(collection, []).append(copy.deepcopy(document))

    def replace(self, collection: str, object_id: str, document: Document) -> None:
        documents = self._collections.setdefault(collection, [])
        index = self._index_of(documents, object_id)
        if index is None:
            documents.append(copy.deepcopy(document))
        else:
            documents[index] = copy.deepcopy(document)

    def scan(self, collection: str) -> list[Document]:
        return copy.deepcopy(self._collections.get(collection, []))

    def get(self, collection: str, object_id: str) -> Document | None:
        documents = self._collections.get(collection, [])
        index = self._index_of(documents, object_id)
        if index is None:
            return None
        return copy.deepcopy(documents[index])

    def contains(self, collection: str, object_id: str) -> bool:
        return self._index_of(self._collections.get(collection, []), object_id) is not None

    def collections(self) -> list[str]:
        return [name for name, documents in self._collections.items() if documents]

    def clear(self) -> None:
        self._collections.clear()

    @staticmethod
    def _index_of(documents: list[Document], object_id: str) -> int | None:
        for index, document in enumerate(documents):
            if str(document.get(ID_FIELD)) == str(object_id):
                return index
        return None
