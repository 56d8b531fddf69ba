"""Data file route — whole-file and byte-range downloads for igv.js."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from genoserve.api.deps import get_extension_filter
from genoserve.config import Settings, get_settings
from genoserve.services.errors import DataAccessError, RangeNotSatisfiable
from genoserve.services.extension_filter import ExtensionFilter
from genoserve.services.range_server import (
    FileRangeResponse,
    content_type_for,
    parse_range,
    resolve_data_path,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _locate(data_dir: str, file_path: str, extension_filter: ExtensionFilter) -> tuple[Path, int]:
    path = resolve_data_path(data_dir, file_path, extension_filter)
    return path, path.stat().st_size


@router.api_route("/{file_path:path}", methods=["GET", "HEAD"])
async def serve_data_file(
    file_path: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    extension_filter: ExtensionFilter = Depends(get_extension_filter),
):
    """Serve a data file, honouring a single-range ``Range`` header."""
    try:
        path, file_size = await run_in_threadpool(
            _locate, settings.data_dir, file_path, extension_filter
        )
        range_header = request.headers.get("range")
        byte_range = parse_range(range_header, file_size) if range_header else None
    except RangeNotSatisfiable as exc:
        return PlainTextResponse(
            exc.message,
            status_code=exc.status_code,
            headers={"Content-Range": f"bytes */{exc.file_size}", "Accept-Ranges": "bytes"},
        )
    except DataAccessError as exc:
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    except OSError as exc:
        logger.error("Error serving file %r: %s", file_path, exc)
        return PlainTextResponse("Error reading file", status_code=500)

    return FileRangeResponse(
        path,
        file_size,
        byte_range=byte_range,
        content_type=content_type_for(path.name),
        chunk_size=settings.stream_chunk_size,
    )
