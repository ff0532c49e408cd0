"""Transports carrying request envelopes to a document service."""

from docmock.transport.base import Transport
from docmock.transport.http import HttpTransport
from docmock.transport.inmemory import InMemoryTransport

__all__ = [
    "HttpTransport",
    "InMemoryTransport",
    "Transport",
]
