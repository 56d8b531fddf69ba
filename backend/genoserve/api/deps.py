"""FastAPI dependency injection — settings-bound services."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException, status

from genoserve.config import Settings, get_settings
from genoserve.services.errors import DataAccessError
from genoserve.services.extension_filter import ExtensionFilter


@lru_cache(maxsize=8)
def _build_filter(suffixes: tuple[str, ...]) -> ExtensionFilter:
    return ExtensionFilter(suffixes)


def get_extension_filter(settings: Settings = Depends(get_settings)) -> ExtensionFilter:
    """Extension filter for the configured allow-list."""
    return _build_filter(tuple(settings.allowed_extensions))


def require_directory_listing(settings: Settings = Depends(get_settings)) -> None:
    if not settings.allow_directory_listing:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Directory listing is disabled",
        )


def http_error(exc: DataAccessError) -> HTTPException:
    """Translate a service-layer error into an HTTPException."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)
