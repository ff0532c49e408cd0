"""Write pipeline: pre-save hook, identity assignment and persistence."""

import copy
import secrets
import string
from collections.abc import Mapping
from typing import Any

from docmock.exceptions import HookRejectedError, InvalidRequestError
from docmock.hooks import HookRegistry, PreSaveHook
from docmock.models import (
    COLLECTION_FIELD,
    CREATED_AT_FIELD,
    ID_FIELD,
    OBJECT_ID_ALIAS,
    RESERVED_FIELDS,
    TYPE_KEY,
    UPDATED_AT_FIELD,
    Document,
    document_id,
    is_embedded,
    json_now,
)
from docmock.observability.logging import get_logger
from docmock.query import IdentityResolver
from docmock.store import CollectionStore

logger = get_logger(__name__)

_ID_ALPHABET = string.ascii_letters + string.digits
# Client-side serialization keys that never reach storage
_TRANSIENT_KEYS = frozenset({TYPE_KEY, "className", OBJECT_ID_ALIAS})


class WritePipeline:
    """Persists saves and answers with the remote service's acknowledgement.

    Creates echo {id, createdAt, updatedAt}; updates echo {updatedAt}.
    Callers merge the acknowledgement into the document they hold.
    """

    def __init__(
        self,
        store: CollectionStore,
        resolver: IdentityResolver,
        hooks: HookRegistry,
        id_length: int = 10,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._hooks = hooks
        self._id_length = id_length

    async def save(self, collection: str, pending: Mapping[str, Any]) -> dict[str, Any]:
        """Run the pre-save hook, then persist.

        Raises:
            HookRejectedError: If the hook declines; nothing is persisted
            InvalidRequestError: If a field points at an unsaved document
        """
        payload = self._prepare(collection, pending)
        hook = self._hooks.pre_save(collection)
        if hook is not None:
            payload = await self._run_hook(collection, hook, payload)
        return self._persist(collection, payload)

    def save_sync(self, collection: str, pending: Mapping[str, Any]) -> dict[str, Any]:
        """Persist without consulting hooks, for seeding fixtures."""
        return self._persist(collection, self._prepare(collection, pending))

    def _prepare(self, collection: str, pending: Mapping[str, Any]) -> Document:
        payload = copy.deepcopy(dict(pending))
        object_id = document_id(payload)
        payload.pop(OBJECT_ID_ALIAS, None)
        if object_id is not None:
            payload[ID_FIELD] = str(object_id)
        payload[COLLECTION_FIELD] = collection
        return payload

    async def _run_hook(
        self, collection: str, hook: PreSaveHook, payload: Document
    ) -> Document:
        try:
            result = await hook(copy.deepcopy(payload))
        except HookRejectedError:
            raise
        except Exception as e:
            logger.info("pre_save_hook_rejected", collection=collection, error=str(e))
            raise HookRejectedError(collection, str(e)) from e

        if result is None:
            return payload
        if not isinstance(result, Mapping):
            raise HookRejectedError(collection, f"unexpected hook result {result!r}")
        if "error" in result:
            logger.info("pre_save_hook_rejected", collection=collection, error=str(result["error"]))
            raise HookRejectedError(collection, str(result["error"]))

        accepted = result.get("accepted", result.get("success"))
        if not isinstance(accepted, Mapping):
            return payload

        merged = {**payload, **copy.deepcopy(dict(accepted))}
        merged.pop(OBJECT_ID_ALIAS, None)
        merged[COLLECTION_FIELD] = collection
        if ID_FIELD in payload:
            merged[ID_FIELD] = payload[ID_FIELD]
        else:
            merged.pop(ID_FIELD, None)
        return merged

    def _persist(self, collection: str, payload: Document) -> dict[str, Any]:
        object_id = payload.get(ID_FIELD)
        document = self._storable(payload)
        now = json_now()

        if object_id is None:
            object_id = self._new_id(collection)
            document.update({
                ID_FIELD: object_id,
                COLLECTION_FIELD: collection,
                CREATED_AT_FIELD: now,
                UPDATED_AT_FIELD: now,
            })
            self._store.insert(collection, document)
            logger.debug("document_created", collection=collection, object_id=object_id)
            return {ID_FIELD: object_id, CREATED_AT_FIELD: now, UPDATED_AT_FIELD: now}

        existing = self._store.get(collection, object_id) or {}
        document.update({
            ID_FIELD: object_id,
            COLLECTION_FIELD: collection,
            CREATED_AT_FIELD: existing.get(CREATED_AT_FIELD)
            or document.get(CREATED_AT_FIELD)
            or now,
            UPDATED_AT_FIELD: now,
        })
        self._store.replace(collection, object_id, document)
        logger.debug("document_updated", collection=collection, object_id=object_id)
        return {UPDATED_AT_FIELD: now}

    def _storable(self, payload: Document) -> Document:
        """Drop client-only keys and store references as pointers only."""
        document: Document = {}
        for key, value in payload.items():
            if key in _TRANSIENT_KEYS:
                continue
            if key in RESERVED_FIELDS:
                document[key] = value
                continue
            pointer = self._resolver.to_pointer(value)
            if pointer is not None:
                document[key] = pointer
            elif is_embedded(value):
                raise InvalidRequestError(f"field '{key}' points at an unsaved document")
            else:
                document[key] = value
        return document

    def _new_id(self, collection: str) -> str:
        while True:
            candidate = "".join(secrets.choice(_ID_ALPHABET) for _ in range(self._id_length))
            if not self._store.contains(collection, candidate):
                return candidate
