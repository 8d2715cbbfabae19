"""Upload a local file to the configured bucket and print its public URL.

Usage:
    python -m scripts.upload_file <path> <key> [content_type]
If content_type is omitted, it is guessed from the file name.
Requires STORAGE_BUCKET_NAME, STORAGE_ACCESS_KEY_ID, STORAGE_SECRET_ACCESS_KEY
and STORAGE_PUBLIC_BASE_URL (environment or .env).
"""

import asyncio
import mimetypes
import sys
from pathlib import Path

from objectstore import UploadRequest, upload_to_storage
from objectstore.domain.exceptions import ObjectStoreException
from objectstore.infrastructure.external.storage.body import FileBody
from objectstore.shared.telemetry import setup_logging, setup_telemetry_from_settings

USAGE = "Usage: python -m scripts.upload_file <path> <key> [content_type]"


def build_request(argv: list[str]) -> UploadRequest:
    """Build an UploadRequest from command-line arguments (argv without program name)."""
    if len(argv) < 2:
        raise ValueError(USAGE)
    path = Path(argv[0])
    if not path.is_file():
        raise ValueError(f"Not a file: {path}")
    content_type = argv[2] if len(argv) > 2 else mimetypes.guess_type(path.name)[0]
    return UploadRequest(
        key=argv[1],
        body=FileBody(path),
        content_type=content_type or "application/octet-stream",
    )


async def main() -> None:
    """Upload one file; exit 1 on usage or storage errors."""
    setup_logging()
    telemetry = setup_telemetry_from_settings()
    try:
        request = build_request(sys.argv[1:])
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    try:
        result = await upload_to_storage(request)
    except ObjectStoreException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        telemetry.shutdown()

    print(f"Uploaded: {result.key}")
    print(f"URL: {result.url}")
    print(f"ETag: {result.etag}")


if __name__ == "__main__":
    asyncio.run(main())
