"""objectstore: SigV4-signed uploads to S3-compatible object storage.

Public surface:
- upload_to_storage(request) -> UploadResult
- get_public_url(key) -> str
- reset_storage_config_cache()
"""

from objectstore.application.dtos.upload import UploadRequest, UploadResult
from objectstore.application.services.storage_service import (
    get_public_url,
    reset_storage_config_cache,
    upload_to_storage,
)
from objectstore.core.config import StorageSettings
from objectstore.domain.exceptions import ObjectStoreException
from objectstore.infrastructure.exceptions import (
    StorageConfigurationError,
    StorageException,
    StorageTransportError,
    StorageUploadError,
    UnsupportedBodyTypeError,
)

__all__ = [
    "ObjectStoreException",
    "StorageConfigurationError",
    "StorageException",
    "StorageSettings",
    "StorageTransportError",
    "StorageUploadError",
    "UnsupportedBodyTypeError",
    "UploadRequest",
    "UploadResult",
    "get_public_url",
    "reset_storage_config_cache",
    "upload_to_storage",
]
