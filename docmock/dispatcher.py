"""Routes request envelopes into the read and write pipelines."""

import json
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from docmock.exceptions import InvalidRequestError
from docmock.models import (
    ID_FIELD,
    UPDATED_AT_FIELD,
    RequestEnvelope,
    RequestMethod,
    json_now,
)
from docmock.observability.logging import get_logger
from docmock.pipelines import ReadPipeline, WritePipeline

logger = get_logger(__name__)


class RequestDispatcher:
    """The request-handler seam between a client transport and the store.

    GET        -> {"results": [...]}, an integer when data.count is set,
                  or one document (or NotFound) when objectId is set
    POST       -> create, answering {id, createdAt, updatedAt}
    POST/PUT   with objectId -> update, answering {updatedAt}
    batch      -> one {"success": {updatedAt}} per sub-request
    """

    def __init__(self, reader: ReadPipeline, writer: WritePipeline) -> None:
        self._reader = reader
        self._writer = writer

    async def handle(self, request: RequestEnvelope | Mapping[str, Any]) -> Any:
        envelope = self._parse(request)

        if envelope.is_batch and envelope.method != RequestMethod.GET:
            return self._batch(envelope)

        if not envelope.collection:
            raise InvalidRequestError(f"{envelope.method.value} request without a collection")

        if envelope.method == RequestMethod.GET:
            return await self._read(envelope)

        if envelope.object_id is None:
            if envelope.method == RequestMethod.PUT:
                raise InvalidRequestError("PUT request without an objectId")
            return await self._writer.save(envelope.collection, envelope.data)

        return await self._writer.save(
            envelope.collection, {**envelope.data, ID_FIELD: envelope.object_id}
        )

    def _parse(self, request: RequestEnvelope | Mapping[str, Any]) -> RequestEnvelope:
        if isinstance(request, RequestEnvelope):
            return request
        try:
            return RequestEnvelope.model_validate(request)
        except ValidationError as e:
            raise InvalidRequestError(f"unknown request: {e}") from e

    async def _read(self, envelope: RequestEnvelope) -> Any:
        collection = envelope.collection or ""
        if envelope.object_id is not None:
            return await self._reader.get(collection, envelope.object_id, envelope.include_paths)

        where = envelope.data.get("where")
        if isinstance(where, str):
            where = json.loads(where)

        if envelope.data.get("count"):
            return await self._reader.count(collection, where)

        limit = envelope.data.get("limit")
        results = await self._reader.find(
            collection,
            where,
            envelope.include_paths,
            limit=int(limit) if limit is not None else None,
            skip=int(envelope.data.get("skip") or 0),
        )
        return {"results": results}

    def _batch(self, envelope: RequestEnvelope) -> list[dict[str, Any]]:
        requests = envelope.data.get("requests") or []
        if not isinstance(requests, list):
            raise InvalidRequestError(f"batch requests must be a list, got {requests!r}")
        logger.debug("batch_acknowledged", requests=len(requests))
        return [{"success": {UPDATED_AT_FIELD: json_now()}} for _ in requests]
