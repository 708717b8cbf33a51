"""Index metadata model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

CREATION_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_creation_time(raw: Any) -> datetime | None:
    """Parses a "yyyy-MM-dd'T'HH:mm:ssZ" timestamp. Anything unparsable yields None."""
    if not isinstance(raw, str):
        return None
    try:
        return datetime.strptime(raw.strip(), CREATION_TIME_FORMAT)
    except ValueError:
        return None


class IndexMetadata(BaseModel):
    """
    Metadata of an index, as reported by the service.

    Attributes:
        name:          Index name.
        code:          Service-assigned index code.
        started:       Whether the index is ready to serve requests.
        size:          Number of documents, if reported.
        creation_time: Creation timestamp, None when missing or unparsable.
        raw:           The untouched metadata object.
    """

    name: str
    code: str | None = None
    started: bool = False
    size: int | None = None
    creation_time: datetime | None = None
    raw: dict[str, Any] = {}

    @classmethod
    def from_response(cls, name: str, response: dict[str, Any] | None) -> "IndexMetadata":
        response = response or {}
        return cls(
            name=name,
            code=response.get("code"),
            started=bool(response.get("started", False)),
            size=response.get("size"),
            creation_time=parse_creation_time(response.get("creation_time")),
            raw=response,
        )
