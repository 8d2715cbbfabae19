"""Storage service protocol (DIP). Implementation: S3StorageService."""

from typing import Protocol, runtime_checkable

from objectstore.application.dtos.upload import UploadRequest, UploadResult


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for object storage upload backends (S3-compatible)."""

    async def upload(self, request: UploadRequest) -> UploadResult:
        """Upload one object with a single request. No retries."""
        ...

    def public_url(self, key: str) -> str:
        """Return the externally reachable URL for key (no network)."""
        ...
