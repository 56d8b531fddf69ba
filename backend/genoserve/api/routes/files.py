"""Data directory listing routes — recursive listing, browse, genomes, tracks."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from starlette.concurrency import run_in_threadpool

from genoserve.api.deps import get_extension_filter, http_error, require_directory_listing
from genoserve.config import Settings, get_settings
from genoserve.schemas.files import (
    BrowseResponse,
    FileListResponse,
    GenomeListResponse,
    TrackConfig,
)
from genoserve.services.directory_walker import browse_directory, list_files, list_genomes
from genoserve.services.errors import DataAccessError
from genoserve.services.extension_filter import ExtensionFilter
from genoserve.services.range_server import resolve_data_path
from genoserve.services.track_config import build_track_config
from genoserve.utils.paths import relative_posix

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/files",
    response_model=FileListResponse,
    dependencies=[Depends(require_directory_listing)],
)
async def get_files(
    settings: Settings = Depends(get_settings),
    extension_filter: ExtensionFilter = Depends(get_extension_filter),
):
    """Flat recursive listing of the data directory."""
    files = await run_in_threadpool(list_files, settings.data_dir, extension_filter)
    return FileListResponse(data_dir=settings.data_dir, files=files)


@router.get(
    "/browse",
    response_model=BrowseResponse,
    dependencies=[Depends(require_directory_listing)],
)
async def browse(
    path: str = "",
    settings: Settings = Depends(get_settings),
    extension_filter: ExtensionFilter = Depends(get_extension_filter),
):
    """Single-level listing of a subdirectory, allowed entries only."""
    try:
        items = await run_in_threadpool(browse_directory, settings.data_dir, path, extension_filter)
    except DataAccessError as exc:
        raise http_error(exc)
    except OSError as exc:
        logger.error("Error browsing directory %r: %s", path, exc)
        raise HTTPException(500, "Failed to browse directory")
    return BrowseResponse(current_path=path, items=items)


@router.get(
    "/genomes",
    response_model=GenomeListResponse,
    dependencies=[Depends(require_directory_listing)],
)
async def get_genomes(
    settings: Settings = Depends(get_settings),
    extension_filter: ExtensionFilter = Depends(get_extension_filter),
):
    """FASTA references in the data directory, for the genome selector."""
    genomes = await run_in_threadpool(list_genomes, settings.data_dir, extension_filter)
    return GenomeListResponse(genomes=genomes)


@router.get("/tracks", response_model=TrackConfig, response_model_exclude_none=True)
async def get_track_config(
    request: Request,
    path: str = Query(..., min_length=1),
    settings: Settings = Depends(get_settings),
    extension_filter: ExtensionFilter = Depends(get_extension_filter),
):
    """igv.js track definition for one data file."""
    try:
        file_path = await run_in_threadpool(resolve_data_path, settings.data_dir, path, extension_filter)
    except DataAccessError as exc:
        raise http_error(exc)

    rel_path = relative_posix(file_path, Path(settings.data_dir))
    return await run_in_threadpool(
        build_track_config, rel_path, str(request.base_url), settings.data_dir
    )
