"""Application services: the upload surface used by the rest of an application."""

from objectstore.application.services.storage_service import (
    get_public_url,
    reset_storage_config_cache,
    upload_to_storage,
)

__all__ = [
    "get_public_url",
    "reset_storage_config_cache",
    "upload_to_storage",
]
