"""Request envelope models.

The envelope mirrors the REST request the remote client would send:
method, target collection, optional object id and a data payload that
holds either query parameters (where/include/count/limit/skip), document
fields for a save, or a batch of sub-requests.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RequestMethod(str, Enum):
    """HTTP methods understood by the dispatcher."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class RequestEnvelope(BaseModel):
    """A single request routed to the read or write pipeline."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    method: RequestMethod = Field(..., description="HTTP method")
    collection: str | None = Field(
        default=None, alias="className", description="Target collection"
    )
    object_id: str | None = Field(
        default=None, alias="objectId", description="Target document for updates"
    )
    route: str = Field(default="classes", description="REST route")
    data: dict[str, Any] = Field(default_factory=dict, description="Request payload")

    @property
    def is_batch(self) -> bool:
        return self.route == "batch"

    @property
    def include_paths(self) -> list[str]:
        """Include paths from a list or a comma-separated string."""
        include = self.data.get("include")
        if not include:
            return []
        if isinstance(include, str):
            include = [include]
        paths = [path for entry in include if entry for path in entry.split(",")]
        return [path.strip() for path in paths if path.strip()]
