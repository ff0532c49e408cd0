"""Reference variants and their normalization.

A field can name another document in three ways: a thin pointer, a fully
hydrated embedded copy, or a bare collection/id pair. Everything that needs
to compare or look up references goes through as_reference().
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

TYPE_KEY = "__type"
POINTER_TYPE = "Pointer"
OBJECT_TYPE = "Object"


def _first_present(value: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if value.get(key) is not None:
            return value[key]
    return None


class Pointer(BaseModel):
    """Thin reference to a stored document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pointer"] = "pointer"
    collection: str = Field(..., description="Target collection name")
    id: str = Field(..., description="Target document id")

    @property
    def identity(self) -> tuple[str, str]:
        return (self.collection, self.id)

    def to_wire(self) -> dict[str, Any]:
        """Serialize in the remote service's pointer shape."""
        return {TYPE_KEY: POINTER_TYPE, "className": self.collection, "objectId": self.id}


class RawIdPair(BaseModel):
    """Untagged collection/id pair, such as a serialized client document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["raw"] = "raw"
    collection: str
    id: str

    @property
    def identity(self) -> tuple[str, str]:
        return (self.collection, self.id)

    def to_wire(self) -> dict[str, Any]:
        return Pointer(collection=self.collection, id=self.id).to_wire()


class Embedded(BaseModel):
    """A hydrated document copy; never looked up again."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["embedded"] = "embedded"
    document: dict[str, Any]

    @property
    def identity(self) -> tuple[str, str] | None:
        collection = _first_present(self.document, "collection", "className")
        object_id = _first_present(self.document, "id", "objectId")
        if collection is None or object_id is None:
            return None
        return (str(collection), str(object_id))

    def to_wire(self) -> dict[str, Any]:
        identity = self.identity
        if identity is None:
            raise ValueError("embedded document has no collection/id to point at")
        return Pointer(collection=identity[0], id=identity[1]).to_wire()


Reference = Annotated[Pointer | Embedded | RawIdPair, Field(discriminator="kind")]


def is_embedded(value: Any) -> bool:
    """Check whether a value carries the hydration tag."""
    return isinstance(value, Mapping) and value.get(TYPE_KEY) == OBJECT_TYPE


def as_reference(value: Any) -> Pointer | Embedded | RawIdPair | None:
    """Normalize any supported reference shape, or return None.

    Accepted shapes:
        - Pointer / Embedded / RawIdPair instances
        - {"__type": "Object", ...} hydrated documents
        - {"__type": "Pointer", "className": c, "objectId": id}, with
          collection/id naming also accepted
        - untagged mappings carrying both a collection and an id
        - (collection, id) tuples
    """
    if isinstance(value, Pointer | Embedded | RawIdPair):
        return value

    if isinstance(value, tuple) and len(value) == 2:
        return RawIdPair(collection=str(value[0]), id=str(value[1]))

    if not isinstance(value, Mapping):
        return None

    type_tag = value.get(TYPE_KEY)
    if type_tag == OBJECT_TYPE:
        return Embedded(document=dict(value))

    if type_tag == POINTER_TYPE:
        collection = _first_present(value, "className", "collection")
        object_id = _first_present(value, "objectId", "id")
    else:
        collection = _first_present(value, "collection", "className")
        object_id = _first_present(value, "id", "objectId")

    if collection is None or object_id is None:
        return None

    if type_tag == POINTER_TYPE:
        return Pointer(collection=str(collection), id=str(object_id))
    if type_tag is None:
        return RawIdPair(collection=str(collection), id=str(object_id))
    return None


def encode_reference(value: Any) -> Any:
    """Encode a reference as a wire pointer; other values pass through.

    Hydrated documents that have not been saved yet (no id) are left as is.
    """
    reference = as_reference(value)
    if reference is None:
        return value
    if isinstance(reference, Embedded) and reference.identity is None:
        return value
    return reference.to_wire()
