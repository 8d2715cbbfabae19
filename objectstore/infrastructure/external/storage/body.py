"""Upload body representations and their normalization to hashed bytes.

Each supported shape is its own frozen dataclass; normalize_body dispatches
over the union and returns one contiguous buffer plus its SHA-256.
"""

from __future__ import annotations

import asyncio
import hashlib
import inspect
import os
from collections.abc import AsyncIterable
from dataclasses import dataclass
from typing import Any, BinaryIO, Protocol

import aiofiles

from objectstore.infrastructure.exceptions import UnsupportedBodyTypeError

CHUNK_SIZE = 64 * 1024  # 64KB

Chunk = bytes | bytearray | memoryview | str


class AsyncReadable(Protocol):
    """Blob-like handle materialized with a single awaited read()."""

    async def read(self) -> bytes: ...


@dataclass(frozen=True)
class TextBody:
    text: str


@dataclass(frozen=True)
class BytesBody:
    """bytes, bytearray, memoryview or any other buffer (array.array, ...).

    Only the viewed window is sent; a sliced memoryview keeps its window.
    """

    data: bytes | bytearray | memoryview


@dataclass(frozen=True)
class BlobBody:
    handle: AsyncReadable


@dataclass(frozen=True)
class FileBody:
    path: str | os.PathLike[str]


@dataclass(frozen=True)
class ChunkStreamBody:
    """Push-style stream: chunks are consumed in arrival order."""

    chunks: AsyncIterable[Chunk]


@dataclass(frozen=True)
class ReaderBody:
    """Pull-style stream: read(CHUNK_SIZE) until an empty read."""

    reader: BinaryIO


UploadBody = TextBody | BytesBody | BlobBody | FileBody | ChunkStreamBody | ReaderBody


@dataclass(frozen=True)
class NormalizedBody:
    """Contiguous body bytes and their lowercase hex SHA-256."""

    data: bytes
    sha256: str

    @property
    def size(self) -> int:
        return len(self.data)


def _as_byte_view(value: Any) -> memoryview | None:
    """Flat unsigned-byte view of any buffer-protocol object, else None."""
    if isinstance(value, str):
        return None
    try:
        view = memoryview(value)
    except TypeError:
        return None
    return view.cast("B") if view.c_contiguous else memoryview(view.tobytes())


def _chunk_to_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    view = _as_byte_view(chunk)
    if view is not None:
        return view.tobytes()
    raise UnsupportedBodyTypeError(f"stream chunk {type(chunk).__name__}")


def coerce_body(value: Any) -> UploadBody:
    """Map a raw Python value onto an UploadBody variant.

    Raises:
        UnsupportedBodyTypeError: value matches no supported shape.
    """
    if isinstance(
        value,
        (TextBody, BytesBody, BlobBody, FileBody, ChunkStreamBody, ReaderBody),
    ):
        return value
    if isinstance(value, str):
        return TextBody(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesBody(value)
    view = _as_byte_view(value)
    if view is not None:
        return BytesBody(view)
    if isinstance(value, os.PathLike):
        return FileBody(value)
    read = getattr(value, "read", None)
    if read is not None and inspect.iscoroutinefunction(read):
        return BlobBody(value)
    if hasattr(value, "__aiter__"):
        return ChunkStreamBody(value)
    if callable(read):
        return ReaderBody(value)
    raise UnsupportedBodyTypeError(type(value).__name__)


def _read_all_sync(reader: BinaryIO) -> bytes:
    """Pull fixed-size chunks until exhaustion (sync)."""
    parts: list[bytes] = []
    while True:
        chunk = reader.read(CHUNK_SIZE)
        if not chunk:
            break
        parts.append(_chunk_to_bytes(chunk))
    return b"".join(parts)


async def _collect(body: UploadBody) -> bytes:
    if isinstance(body, TextBody):
        return body.text.encode("utf-8")
    if isinstance(body, BytesBody):
        return _chunk_to_bytes(body.data)
    if isinstance(body, BlobBody):
        return _chunk_to_bytes(await body.handle.read())
    if isinstance(body, FileBody):
        async with aiofiles.open(body.path, "rb") as f:
            return await f.read()
    if isinstance(body, ChunkStreamBody):
        parts = [_chunk_to_bytes(chunk) async for chunk in body.chunks]
        return b"".join(parts)
    if isinstance(body, ReaderBody):
        # Reader may block (file, socket); keep it off the event loop.
        return await asyncio.to_thread(_read_all_sync, body.reader)
    raise UnsupportedBodyTypeError(type(body).__name__)


async def normalize_body(body: Any) -> NormalizedBody:
    """Collect any supported body into bytes and hash it.

    Args:
        body: UploadBody variant or raw value accepted by coerce_body.

    Returns:
        NormalizedBody with data and lowercase hex SHA-256.

    Raises:
        UnsupportedBodyTypeError: body (or one of its stream chunks) is not supported.
    """
    data = await _collect(coerce_body(body))
    return NormalizedBody(data=data, sha256=hashlib.sha256(data).hexdigest())
