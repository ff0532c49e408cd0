"""Configuration section models."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """structlog output settings."""

    level: LogLevel = Field(default="INFO", description="Minimum log level")
    format: Literal["json", "console"] = Field(
        default="console", description="Renderer for log events"
    )


class StoreConfig(BaseModel):
    """In-memory store behaviour."""

    id_length: int = Field(
        default=10, ge=4, le=64, description="Length of generated document ids"
    )


class ClientConfig(BaseModel):
    """Defaults for DocumentClient's HTTP transport."""

    base_url: str = Field(
        default="http://localhost:1337/parse", description="Remote service base URL"
    )
    application_id: str | None = Field(default=None, description="Application id header")
    rest_api_key: str | None = Field(default=None, description="REST API key header")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
