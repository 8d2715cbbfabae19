"""DTOs for the upload use case (no dependency on the HTTP transport)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UploadRequest:
    """Input for one upload. Leading slashes in key are stripped before use.

    body is an UploadBody variant or a raw value accepted by coerce_body
    (str, bytes-like, path, async reader, async iterable, binary reader).
    """

    key: str
    body: Any
    content_type: str | None = None
    cache_control: str | None = None
    metadata: dict[str, str] | None = None


@dataclass(frozen=True)
class UploadResult:
    """Result of a successful upload: sanitized key, public URL, ETag verbatim."""

    key: str
    url: str
    etag: str | None = None
