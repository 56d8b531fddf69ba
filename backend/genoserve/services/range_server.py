"""Byte-range file serving for the data root.

igv.js reads BAM/CRAM/tabix files with ``Range`` requests, so every data file
is served with ``Accept-Ranges: bytes`` and a single requested range yields a
``206 Partial Content`` response carrying only that slice of the file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import partial
from pathlib import Path

import anyio
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from genoserve.services.errors import ForbiddenError, NotFoundError, RangeNotSatisfiable
from genoserve.services.extension_filter import ExtensionFilter
from genoserve.utils.paths import resolve_within

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    ".bam": "application/octet-stream",
    ".bai": "application/octet-stream",
    ".cram": "application/octet-stream",
    ".crai": "application/octet-stream",
    ".vcf": "text/plain",
    ".bed": "text/plain",
    ".gff": "text/plain",
    ".gff3": "text/plain",
    ".gtf": "text/plain",
    ".fa": "text/plain",
    ".fasta": "text/plain",
    ".json": "application/json",
    ".xml": "application/xml",
}

_RANGE_SPEC = re.compile(r"^\s*([0-9]*)\s*-\s*([0-9]*)\s*$")


@dataclass(frozen=True)
class ByteRange:
    """Inclusive byte range within a file."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{file_size}"


def parse_range(header: str, file_size: int) -> ByteRange | None:
    """Parse a ``Range`` header against a file of *file_size* bytes.

    Only the first range of a multi-range header is honoured. Returns None
    when the header should be ignored (unknown unit, bad syntax), in which
    case the whole file is served. Raises ``RangeNotSatisfiable`` when the
    range starts past the end of the file or is inverted.
    """
    unit, sep, ranges = header.partition("=")
    if not sep or unit.strip().lower() != "bytes":
        return None

    match = _RANGE_SPEC.match(ranges.split(",", 1)[0])
    if match is None:
        return None
    first, last = match.groups()
    if not first and not last:
        return None

    if not first:
        # Suffix range: the final N bytes
        suffix = int(last)
        if suffix == 0 or file_size == 0:
            raise RangeNotSatisfiable(file_size)
        return ByteRange(max(file_size - suffix, 0), file_size - 1)

    start = int(first)
    end = int(last) if last else file_size - 1
    if start >= file_size or start > end:
        raise RangeNotSatisfiable(file_size)
    return ByteRange(start, min(end, file_size - 1))


def content_type_for(filename: str) -> str:
    return CONTENT_TYPES.get(Path(filename).suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_data_path(root: str | Path, request_path: str, extension_filter: ExtensionFilter) -> Path:
    """Map a ``/data/<path>`` request onto a servable file under *root*."""
    try:
        file_path = resolve_within(root, request_path)
    except ValueError:
        logger.warning("Rejected path outside data root: %r", request_path)
        raise ForbiddenError("Access denied")

    if not file_path.is_file():
        raise NotFoundError("File not found")
    if not extension_filter.is_allowed(file_path.name):
        raise ForbiddenError("File type not allowed")
    return file_path


class FileRangeResponse(Response):
    """Stream a whole file (200) or one byte range of it (206).

    The file is opened before headers are sent and closed on every exit
    path, including client disconnect, which cancels the stream.
    """

    chunk_size = 64 * 1024

    def __init__(
        self,
        path: str | Path,
        file_size: int,
        byte_range: ByteRange | None = None,
        content_type: str | None = None,
        chunk_size: int | None = None,
    ):
        self.path = Path(path)
        self.file_size = file_size
        self.byte_range = byte_range
        if chunk_size:
            self.chunk_size = chunk_size

        headers = {
            "accept-ranges": "bytes",
            "content-type": content_type or content_type_for(self.path.name),
        }
        if byte_range is None:
            status_code = 200
            self.offset, self.length = 0, file_size
        else:
            status_code = 206
            self.offset, self.length = byte_range.start, byte_range.length
            headers["content-range"] = byte_range.content_range(file_size)
        headers["content-length"] = str(self.length)

        super().__init__(status_code=status_code, headers=headers)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        send_body = scope.get("method", "GET") != "HEAD" and self.length > 0

        async with await anyio.open_file(self.path, "rb") as file:
            await send(
                {
                    "type": "http.response.start",
                    "status": self.status_code,
                    "headers": self.raw_headers,
                }
            )
            if not send_body:
                await send({"type": "http.response.body", "body": b"", "more_body": False})
            else:
                async with anyio.create_task_group() as task_group:

                    async def wrap(func) -> None:
                        await func()
                        task_group.cancel_scope.cancel()

                    task_group.start_soon(wrap, partial(self._stream, file, send))
                    await wrap(partial(self._listen_for_disconnect, receive))

    async def _stream(self, file, send: Send) -> None:
        try:
            await file.seek(self.offset)
            remaining = self.length
            while remaining > 0:
                chunk = await file.read(min(self.chunk_size, remaining))
                if not chunk:
                    raise OSError(f"{self.path} shrank while streaming ({remaining} bytes short)")
                remaining -= len(chunk)
                await send(
                    {
                        "type": "http.response.body",
                        "body": chunk,
                        "more_body": remaining > 0,
                    }
                )
        except OSError as exc:
            logger.error("Error streaming %s: %s", self.path, exc)
            raise

    async def _listen_for_disconnect(self, receive: Receive) -> None:
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
