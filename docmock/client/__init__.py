"""Async document client and query builder."""

from docmock.client.client import DocumentClient
from docmock.client.query import Query

__all__ = [
    "DocumentClient",
    "Query",
]
