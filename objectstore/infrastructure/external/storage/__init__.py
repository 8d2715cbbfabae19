"""Storage: S3-compatible upload client with AWS Signature Version 4.

Submodules:
- body: upload body variants and normalization to hashed bytes.
- addressing: path-style / virtual-hosted-style request targets, public URLs.
- signing: SigV4 canonical request, string to sign, signing key, header.
- s3_storage: S3StorageService issuing the signed PUT over httpx.
"""

from objectstore.infrastructure.external.storage.body import (
    BlobBody,
    BytesBody,
    ChunkStreamBody,
    FileBody,
    NormalizedBody,
    ReaderBody,
    TextBody,
    UploadBody,
    coerce_body,
    normalize_body,
)
from objectstore.infrastructure.external.storage.protocol import StorageProtocol
from objectstore.infrastructure.external.storage.s3_storage import S3StorageService

__all__ = [
    "BlobBody",
    "BytesBody",
    "ChunkStreamBody",
    "FileBody",
    "NormalizedBody",
    "ReaderBody",
    "S3StorageService",
    "StorageProtocol",
    "TextBody",
    "UploadBody",
    "coerce_body",
    "normalize_body",
]
