"""Upload surface: upload_to_storage, get_public_url, reset_storage_config_cache.

Settings resolve once from STORAGE_* (get_storage_settings) unless passed
explicitly, so callers and tests can inject configuration directly.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import httpx

from objectstore.application.dtos.upload import UploadRequest, UploadResult
from objectstore.core.config import (
    StorageSettings,
    get_storage_settings,
    reset_storage_config_cache,
)
from objectstore.infrastructure.external.storage.addressing import build_public_url
from objectstore.infrastructure.external.storage.s3_storage import S3StorageService

__all__ = [
    "get_public_url",
    "reset_storage_config_cache",
    "upload_to_storage",
]


async def upload_to_storage(
    request: UploadRequest,
    *,
    settings: StorageSettings | None = None,
    http_client: httpx.AsyncClient | None = None,
    clock: Callable[[], datetime] | None = None,
) -> UploadResult:
    """Upload one object and return its key, public URL and ETag.

    Args:
        request: Key, body and optional content type, cache control, metadata.
        settings: Storage settings; defaults to the cached environment settings.
        http_client: Optional shared client; a short-lived one is used otherwise.
        clock: Optional signing clock (fixed in tests).

    Raises:
        StorageConfigurationError: Required STORAGE_* variable missing.
        UnsupportedBodyTypeError: Body shape not supported.
        StorageUploadError: Non-2xx response.
        StorageTransportError: Network failure before a response.
    """
    resolved = settings or get_storage_settings()
    async with S3StorageService(
        resolved, http_client=http_client, clock=clock
    ) as service:
        return await service.upload(request)


def get_public_url(key: str, settings: StorageSettings | None = None) -> str:
    """Return public_base_url joined with key (no network, no signing)."""
    resolved = settings or get_storage_settings()
    return build_public_url(resolved.public_base_url, key)
