"""Infrastructure exceptions for storage configuration and uploads.

Storage errors extend ObjectStoreException so callers can map them
consistently (error_code + details).
"""

from objectstore.domain.exceptions import ObjectStoreException


class StorageException(ObjectStoreException):
    """Base exception for storage operations."""


class StorageConfigurationError(StorageException):
    """A required storage environment variable is missing."""

    def __init__(self, variable: str) -> None:
        super().__init__(
            f"Missing required storage environment variable: {variable}",
            "STORAGE_CONFIGURATION_ERROR",
            {"variable": variable},
        )
        self.variable = variable


class UnsupportedBodyTypeError(StorageException):
    """Upload body is not one of the supported representations."""

    def __init__(self, body_type: str) -> None:
        super().__init__(
            f"Unsupported storage upload body type: {body_type}",
            "STORAGE_UNSUPPORTED_BODY",
            {"body_type": body_type},
        )
        self.body_type = body_type


class StorageUploadError(StorageException):
    """Storage service answered the PUT with a non-2xx status."""

    def __init__(self, key: str, status_code: int, reason: str) -> None:
        super().__init__(
            f"Storage upload failed ({status_code}) for {key}: {reason}",
            "STORAGE_UPLOAD_ERROR",
            {"key": key, "status_code": status_code, "reason": reason},
        )
        self.key = key
        self.status_code = status_code
        self.response_text = reason


class StorageTransportError(StorageException):
    """Request failed before a response was received (DNS, connect, timeout)."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Storage transport failed for {key}: {reason}",
            "STORAGE_TRANSPORT_ERROR",
            {"key": key, "reason": reason},
        )
        self.key = key
