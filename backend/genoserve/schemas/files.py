"""File listing schemas — field names match what the igv.js front end reads."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FileEntry(BaseModel):
    """One file or directory under the data root."""
    name: str
    path: str  # relative to data root, "/"-separated
    type: Literal["file", "directory"]
    size: int = 0
    modified: datetime | None = None


class BrowseItem(FileEntry):
    allowed: bool = True


class FileListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data_dir: str = Field(alias="dataDir")
    files: list[FileEntry]


class BrowseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_path: str = Field(alias="currentPath")
    items: list[BrowseItem]


class GenomeEntry(BaseModel):
    """Local FASTA reference that can be loaded as a custom genome."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    display_name: str = Field(alias="displayName")
    has_index: bool = Field(False, alias="hasIndex")
    size: int = 0


class GenomeListResponse(BaseModel):
    genomes: list[GenomeEntry]


class TrackType(str, Enum):
    ALIGNMENT = "alignment"
    VARIANT = "variant"
    ANNOTATION = "annotation"
    WIG = "wig"
    UNKNOWN = "unknown"


class TrackConfig(BaseModel):
    """igv.js track definition for a served data file."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    url: str
    type: TrackType
    format: str
    index_url: str | None = Field(None, alias="indexURL")
