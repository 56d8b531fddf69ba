"""genoserve configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ALLOWED_EXTENSIONS = [
    ".bam", ".bai", ".cram", ".crai",
    ".vcf", ".vcf.gz", ".tbi",
    ".bed", ".bed.gz",
    ".gff", ".gff3", ".gtf",
    ".fa", ".fasta", ".fai",
    ".bw", ".bigwig",
    ".wig", ".bedgraph",
    ".json", ".xml",
]


def _split_csv(value: list[str] | str) -> list[str]:
    if isinstance(value, str):
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


class Settings(BaseSettings):
    """Server settings. ``PORT`` and ``DATA_DIR`` are honoured without prefix."""

    app_name: str = "genoserve"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = Field(8080, validation_alias=AliasChoices("GENOSERVE_PORT", "PORT"))
    api_prefix: str = "/api"
    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    # Data
    data_dir: str = Field(
        str(Path.home() / "igv_data"),
        validation_alias=AliasChoices("GENOSERVE_DATA_DIR", "DATA_DIR"),
    )
    allowed_extensions: Annotated[list[str], NoDecode] = DEFAULT_ALLOWED_EXTENSIONS
    allow_directory_listing: bool = True
    stream_chunk_size: int = 64 * 1024  # 64 KB

    # Front end
    static_dir: str = "../public"

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="GENOSERVE_",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        return _split_csv(value) or ["*"]

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, value: list[str] | str) -> list[str]:
        """Lowercase every suffix and make sure it starts with a dot."""
        result: list[str] = []
        for ext in _split_csv(value):
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in result:
                result.append(ext)
        return result

    @field_validator("stream_chunk_size")
    @classmethod
    def _positive_chunk(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("stream_chunk_size must be positive")
        return value

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure data and static directories are absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        for field in ("data_dir", "static_dir"):
            val = Path(getattr(self, field)).expanduser()
            if not val.is_absolute():
                val = base / val
            setattr(self, field, str(val.resolve()))
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

