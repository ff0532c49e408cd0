"""Transport that talks to a real remote document service over REST."""

import json
from typing import Any

import httpx

from docmock.exceptions import DocumentClientError
from docmock.models import RequestEnvelope, RequestMethod
from docmock.transport.base import Transport


class HttpTransport(Transport):
    """Async httpx transport for the /classes and /batch REST routes.

    Attributes:
        base_url: Base URL of the document service
    """

    def __init__(
        self,
        base_url: str,
        application_id: str | None = None,
        rest_api_key: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Base URL of the document service
            application_id: Value for the X-Parse-Application-Id header
            rest_api_key: Value for the X-Parse-REST-API-Key header
            timeout: Request timeout in seconds
            client: Preconfigured httpx client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self._application_id = application_id
        self._rest_api_key = rest_api_key
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._application_id:
            headers["X-Parse-Application-Id"] = self._application_id
        if self._rest_api_key:
            headers["X-Parse-REST-API-Key"] = self._rest_api_key
        return headers

    async def request(self, envelope: RequestEnvelope) -> Any:
        method, path, params, body = self._to_http(envelope)
        response = await self._client.request(
            method=method,
            url=path,
            headers=self._headers(),
            params=params,
            json=body,
        )

        if response.status_code >= 400:
            details = None
            try:
                details = response.json()
                message = (
                    details.get("error", response.text) if isinstance(details, dict) else response.text
                )
            except ValueError:
                message = response.text
            raise DocumentClientError(
                message=message,
                status_code=response.status_code,
                details=details,
            )

        payload = response.json()
        if envelope.method == RequestMethod.GET and envelope.data.get("count"):
            return int(payload.get("count", 0))
        return payload

    def _to_http(
        self, envelope: RequestEnvelope
    ) -> tuple[str, str, dict[str, Any] | None, dict[str, Any] | None]:
        """Translate an envelope into (method, path, query params, json body)."""
        if envelope.is_batch and envelope.method != RequestMethod.GET:
            return "POST", "/batch", None, {"requests": envelope.data.get("requests") or []}

        path = f"/classes/{envelope.collection}"
        if envelope.object_id is not None:
            path = f"{path}/{envelope.object_id}"

        if envelope.method != RequestMethod.GET:
            method = "PUT" if envelope.object_id is not None else "POST"
            return method, path, None, envelope.data

        params: dict[str, Any] = {}
        where = envelope.data.get("where")
        if where:
            params["where"] = where if isinstance(where, str) else json.dumps(where)
        if envelope.include_paths:
            params["include"] = ",".join(envelope.include_paths)
        if envelope.data.get("count"):
            params["count"] = 1
            params["limit"] = 0
        else:
            for key in ("limit", "skip"):
                if envelope.data.get(key) is not None:
                    params[key] = envelope.data[key]
        return "GET", path, params or None, None
