"""Read pipeline result types."""

from pydantic import BaseModel, ConfigDict

from docmock.exceptions import DocumentNotFoundError


class NotFound(BaseModel):
    """Resolved outcome of a get-by-id with no matching document."""

    model_config = ConfigDict(frozen=True)

    collection: str
    object_id: str

    def to_error(self) -> DocumentNotFoundError:
        """Build the exception a caller raises if it treats this as fatal."""
        return DocumentNotFoundError(self.collection, self.object_id)
