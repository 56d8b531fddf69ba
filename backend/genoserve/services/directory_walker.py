"""Directory listing for the data root — recursive walk and single-level browse."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from genoserve.schemas.files import BrowseItem, FileEntry, GenomeEntry
from genoserve.services.errors import BadRequestError, ForbiddenError, NotFoundError
from genoserve.services.extension_filter import ExtensionFilter
from genoserve.utils.paths import relative_posix, resolve_within

logger = logging.getLogger(__name__)

FASTA_SUFFIXES = (".fasta", ".fa")


def _mtime(stat: os.stat_result) -> datetime:
    return datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)


def _scan_sorted(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)


def list_files(root: str | Path, extension_filter: ExtensionFilter) -> list[FileEntry]:
    """Recursively list *root* as a flat, depth-first sequence of entries.

    Directories are always emitted and descended into; regular files only
    when the extension filter allows them. Symlinks are skipped, so the walk
    cannot cycle. A subdirectory that cannot be read contributes nothing.
    """
    base = Path(root).resolve()
    return _walk(base, base, extension_filter)


def _walk(directory: Path, base: Path, extension_filter: ExtensionFilter) -> list[FileEntry]:
    results: list[FileEntry] = []
    try:
        entries = _scan_sorted(directory)
    except OSError as exc:
        logger.warning("Error reading directory %s: %s", directory, exc)
        return results

    for entry in entries:
        path = Path(entry.path)
        try:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                results.append(
                    FileEntry(
                        name=entry.name,
                        path=relative_posix(path, base),
                        type="directory",
                        size=0,
                    )
                )
                results.extend(_walk(path, base, extension_filter))
            elif entry.is_file(follow_symlinks=False) and extension_filter.is_allowed(entry.name):
                stat = entry.stat(follow_symlinks=False)
                results.append(
                    FileEntry(
                        name=entry.name,
                        path=relative_posix(path, base),
                        type="file",
                        size=stat.st_size,
                        modified=_mtime(stat),
                    )
                )
        except OSError as exc:
            # Removed between scandir() and stat()
            logger.debug("Skipping %s: %s", path, exc)
    return results


def browse_directory(
    root: str | Path,
    sub_path: str,
    extension_filter: ExtensionFilter,
) -> list[BrowseItem]:
    """List one level of ``root/sub_path``, keeping only allowed entries."""
    base = Path(root).resolve()
    try:
        target = resolve_within(base, sub_path)
    except ValueError:
        raise ForbiddenError("Access denied")

    if not target.exists():
        raise NotFoundError("Directory not found")
    if not target.is_dir():
        raise BadRequestError("Not a directory")

    items: list[BrowseItem] = []
    for entry in _scan_sorted(target):
        try:
            if entry.is_symlink():
                continue
            stat = entry.stat(follow_symlinks=False)
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            logger.debug("Skipping %s: %s", entry.path, exc)
            continue

        item = BrowseItem(
            name=entry.name,
            path=relative_posix(Path(entry.path), base),
            type="directory" if is_dir else "file",
            size=0 if is_dir else stat.st_size,
            modified=_mtime(stat),
            allowed=is_dir or extension_filter.is_allowed(entry.name),
        )
        if item.allowed:
            items.append(item)
    return items


def list_genomes(root: str | Path, extension_filter: ExtensionFilter) -> list[GenomeEntry]:
    """Find FASTA references under *root* that the front end can load as genomes."""
    files = [f for f in list_files(root, extension_filter) if f.type == "file"]
    paths = {f.path for f in files}

    genomes: list[GenomeEntry] = []
    for f in files:
        lowered = f.name.lower()
        suffix = next((s for s in FASTA_SUFFIXES if lowered.endswith(s)), None)
        if suffix is None:
            continue
        genomes.append(
            GenomeEntry(
                name=f.name,
                path=f.path,
                display_name=f.name[: -len(suffix)],
                has_index=f"{f.path}.fai" in paths,
                size=f.size,
            )
        )
    return genomes
