"""S3-compatible object upload (AWS S3, Cloudflare R2, MinIO) over httpx with SigV4."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import httpx

from objectstore.application.dtos.upload import UploadRequest, UploadResult
from objectstore.core.config import StorageSettings, get_settings
from objectstore.infrastructure.exceptions import (
    StorageTransportError,
    StorageUploadError,
)
from objectstore.infrastructure.external.storage.addressing import (
    build_public_url,
    build_request_target,
    sanitize_key,
)
from objectstore.infrastructure.external.storage.body import normalize_body
from objectstore.infrastructure.external.storage.signing import SigV4Signer
from objectstore.shared.telemetry.logging import get_logger
from objectstore.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)
from objectstore.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def _response_text(response: httpx.Response) -> str:
    """Response body as text; the reason phrase if it cannot be decoded."""
    try:
        return response.text
    except (httpx.HTTPError, ValueError, LookupError):
        return response.reason_phrase


class S3StorageService:
    """Single-request object upload signed with AWS Signature Version 4.

    Uses httpx.AsyncClient. An injected client is never closed by this
    service; one created here is closed by aclose() / async with.
    """

    def __init__(
        self,
        settings: StorageSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the upload client.

        Args:
            settings: Bucket, endpoint, credentials and addressing mode.
            http_client: Optional shared client (tests pass a MockTransport one).
            clock: Returns the signing instant; defaults to utc_now.
            timeout: Timeout for the owned client; defaults to Settings.http_timeout_seconds.
        """
        self.settings = settings
        self._signer = SigV4Signer.from_settings(settings)
        self._clock = clock or utc_now
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else get_settings().http_timeout_seconds
            )
            self._owns_http = True
        else:
            self._owns_http = False
        self._http = http_client

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> S3StorageService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def public_url(self, key: str) -> str:
        return build_public_url(self.settings.public_base_url, key)

    def _build_headers(self, request: UploadRequest, host: str, size: int) -> dict[str, str]:
        headers = {"host": host, "content-length": str(size)}
        if request.content_type:
            headers["content-type"] = request.content_type
        if request.cache_control:
            headers["cache-control"] = request.cache_control
        if request.metadata:
            for meta_key, meta_value in request.metadata.items():
                headers[f"x-amz-meta-{meta_key.lower()}"] = meta_value
        return headers

    @traced("storage.upload")
    async def upload(self, request: UploadRequest) -> UploadResult:
        """Normalize, sign and PUT one object.

        Raises:
            UnsupportedBodyTypeError: Body shape not supported.
            StorageUploadError: Non-2xx response (status_code, response_text).
            StorageTransportError: No response (DNS, connect, reset, timeout).
        """
        key = sanitize_key(request.key)
        body = await normalize_body(request.body)
        target = build_request_target(self.settings, key)
        headers = self._build_headers(request, target.host, body.size)
        signed = self._signer.sign(
            "PUT",
            target.canonical_uri,
            target.canonical_query,
            headers,
            body.sha256,
            self._clock(),
        )
        add_span_attributes(
            **{
                "storage.bucket": self.settings.bucket_name,
                "storage.key": key,
                "storage.size": body.size,
                "storage.path_style": self.settings.force_path_style,
            }
        )
        logger.debug(
            "Uploading %s to bucket %s (%d bytes, host=%s)",
            key,
            self.settings.bucket_name,
            body.size,
            target.host,
        )

        try:
            response = await self._http.put(
                target.wire_url, headers=signed, content=body.data
            )
        except httpx.TransportError as e:
            logger.warning("Storage transport failed for %s: %s", key, e)
            raise StorageTransportError(key, str(e) or type(e).__name__) from e

        add_span_event("storage.response", {"status_code": response.status_code})
        if not response.is_success:
            text = _response_text(response)
            logger.warning(
                "Storage upload failed for %s: %d %s",
                key,
                response.status_code,
                response.reason_phrase,
            )
            raise StorageUploadError(key, response.status_code, text)

        etag = response.headers.get("etag")
        logger.info("Uploaded %s (%d bytes, etag=%s)", key, body.size, etag)
        return UploadResult(key=key, url=self.public_url(key), etag=etag)
