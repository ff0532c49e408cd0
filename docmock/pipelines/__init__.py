"""Read and write pipelines over a collection store."""

from docmock.pipelines.read import ReadPipeline
from docmock.pipelines.write import WritePipeline

__all__ = [
    "ReadPipeline",
    "WritePipeline",
]
