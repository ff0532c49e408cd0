"""Exception hierarchy for consistent error handling.

All docmock exceptions inherit from DocMockError, which carries an
error_code so callers can react to failures without string matching.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request envelope was malformed or used an unknown method."""

    UNSUPPORTED_QUERY_OPERATOR = "UNSUPPORTED_QUERY_OPERATOR"
    """A where clause used an operator shape that is not emulated."""

    UNSUPPORTED_HOOK_TYPE = "UNSUPPORTED_HOOK_TYPE"
    """A hook kind other than beforeSave was registered."""

    OBJECT_NOT_FOUND = "OBJECT_NOT_FOUND"
    """No stored document matched a get-by-id lookup."""

    HOOK_REJECTED = "HOOK_REJECTED"
    """A pre-save hook declined the write."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class DocMockError(Exception):
    """Base exception for all docmock errors.

    Subclasses set error_code to identify the failure.
    """

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(DocMockError):
    """Raised when a request envelope cannot be dispatched."""

    error_code = ErrorCode.INVALID_REQUEST


class UnsupportedQueryOperatorError(DocMockError):
    """Raised when a where clause contains an unrecognized operator."""

    error_code = ErrorCode.UNSUPPORTED_QUERY_OPERATOR

    def __init__(self, clause: Any, key: str | None = None) -> None:
        self.clause = clause
        self.key = key
        location = f" for key '{key}'" if key else ""
        super().__init__(f"unknown query where clause{location}: {clause!r}")


class UnsupportedHookTypeError(DocMockError):
    """Raised when registering a hook kind other than beforeSave."""

    error_code = ErrorCode.UNSUPPORTED_HOOK_TYPE

    def __init__(self, hook_type: str) -> None:
        self.hook_type = hook_type
        super().__init__(f"only beforeSave hook supported, got '{hook_type}'")


class DocumentNotFoundError(DocMockError):
    """Raised when a document id does not exist in its collection."""

    error_code = ErrorCode.OBJECT_NOT_FOUND

    def __init__(self, collection: str, object_id: str) -> None:
        self.collection = collection
        self.object_id = object_id
        super().__init__(f"{collection} '{object_id}' not found")


class HookRejectedError(DocMockError):
    """Raised when a pre-save hook declines a write."""

    error_code = ErrorCode.HOOK_REJECTED

    def __init__(self, collection: str, reason: str) -> None:
        self.collection = collection
        self.reason = reason
        super().__init__(f"beforeSave hook for {collection} rejected save: {reason}")


class DocumentClientError(DocMockError):
    """Raised by the HTTP transport when the remote service answers with an error."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details
