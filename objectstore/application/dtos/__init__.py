"""Application DTOs: plain data passed between layers."""

from objectstore.application.dtos.upload import UploadRequest, UploadResult

__all__ = [
    "UploadRequest",
    "UploadResult",
]
