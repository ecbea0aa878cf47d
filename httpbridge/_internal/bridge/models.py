"""Pydantic models for values returned to scripts."""

from typing import Any

import httpx
from pydantic import BaseModel, Field


def canonical_header_key(name: str) -> str:
    """Canonicalise a header name: ``content-type`` -> ``Content-Type``."""
    return "-".join(part.capitalize() for part in name.split("-"))


class ResponseTable(BaseModel):
    """Response returned from a dispatch.

    Fields:
        code: HTTP status code, copied verbatim.
        body: Full response body, the raw bytes as received.
        headers: Header name -> value. Names are canonicalised. A header sent
            more than once (e.g. Set-Cookie) surfaces ONLY its first value.
    """

    code: int
    body: bytes
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ResponseTable":
        """Build from a response whose body has already been read."""
        headers: dict[str, str] = {}
        for name, value in response.headers.multi_items():
            headers.setdefault(canonical_header_key(name), value)
        return cls(code=response.status_code, body=response.content, headers=headers)

    def to_table(self) -> dict[str, Any]:
        return self.model_dump()
