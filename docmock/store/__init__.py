"""Collection stores holding canonical documents."""

from docmock.store.base import CollectionStore
from docmock.store.inmemory import InMemoryCollectionStore

__all__ = [
    "CollectionStore",
    "InMemoryCollectionStore",
]
