"""Domain models for documents, references and requests."""

from docmock.models.document import (
    COLLECTION_FIELD,
    CREATED_AT_FIELD,
    ID_FIELD,
    OBJECT_ID_ALIAS,
    RESERVED_FIELDS,
    UPDATED_AT_FIELD,
    Document,
    document_id,
    json_now,
    to_json_date,
    utc_now,
)
from docmock.models.reference import (
    OBJECT_TYPE,
    POINTER_TYPE,
    TYPE_KEY,
    Embedded,
    Pointer,
    RawIdPair,
    Reference,
    as_reference,
    encode_reference,
    is_embedded,
)
from docmock.models.request import RequestEnvelope, RequestMethod
from docmock.models.results import NotFound

__all__ = [
    "COLLECTION_FIELD",
    "CREATED_AT_FIELD",
    "ID_FIELD",
    "OBJECT_ID_ALIAS",
    "OBJECT_TYPE",
    "POINTER_TYPE",
    "RESERVED_FIELDS",
    "TYPE_KEY",
    "UPDATED_AT_FIELD",
    "Document",
    "Embedded",
    "NotFound",
    "Pointer",
    "RawIdPair",
    "Reference",
    "RequestEnvelope",
    "RequestMethod",
    "as_reference",
    "document_id",
    "encode_reference",
    "is_embedded",
    "json_now",
    "to_json_date",
    "utc_now",
]
