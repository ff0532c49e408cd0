"""docmock: an in-memory document service for tests.

Emulates the query, persistence and reference-resolution semantics of a
Parse-style REST document database without any network or disk.
"""

from docmock.client import DocumentClient, Query
from docmock.exceptions import (
    DocMockError,
    DocumentClientError,
    DocumentNotFoundError,
    ErrorCode,
    HookRejectedError,
    InvalidRequestError,
    UnsupportedHookTypeError,
    UnsupportedQueryOperatorError,
)
from docmock.mock_store import MockStore
from docmock.models import Embedded, NotFound, Pointer, RawIdPair, RequestEnvelope

__all__ = [
    "DocMockError",
    "DocumentClient",
    "DocumentClientError",
    "DocumentNotFoundError",
    "Embedded",
    "ErrorCode",
    "HookRejectedError",
    "InvalidRequestError",
    "MockStore",
    "NotFound",
    "Pointer",
    "Query",
    "RawIdPair",
    "RequestEnvelope",
    "UnsupportedHookTypeError",
    "UnsupportedQueryOperatorError",
]
