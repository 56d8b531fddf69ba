"""igv.js track definitions derived from a data file's extension."""

from __future__ import annotations

from pathlib import Path

from genoserve.schemas.files import TrackConfig, TrackType

# suffix -> (track type, igv format, index suffix)
TRACK_FORMATS: dict[str, tuple[TrackType, str, str | None]] = {
    ".bam": (TrackType.ALIGNMENT, "bam", ".bai"),
    ".cram": (TrackType.ALIGNMENT, "cram", ".crai"),
    ".vcf.gz": (TrackType.VARIANT, "vcf", ".tbi"),
    ".vcf": (TrackType.VARIANT, "vcf", None),
    ".bed.gz": (TrackType.ANNOTATION, "bed", ".tbi"),
    ".bed": (TrackType.ANNOTATION, "bed", None),
    ".gff": (TrackType.ANNOTATION, "gff3", None),
    ".gff3": (TrackType.ANNOTATION, "gff3", None),
    ".gtf": (TrackType.ANNOTATION, "gtf", None),
    ".bw": (TrackType.WIG, "bigwig", None),
    ".bigwig": (TrackType.WIG, "bigwig", None),
    ".wig": (TrackType.WIG, "wig", None),
    ".bedgraph": (TrackType.WIG, "bedgraph", None),
}

_SUFFIXES = sorted(TRACK_FORMATS, key=len, reverse=True)


def track_format(filename: str) -> tuple[TrackType, str, str | None]:
    """Return (type, format, index suffix) for *filename*; unknown when unmapped."""
    lowered = filename.lower()
    for suffix in _SUFFIXES:
        if lowered.endswith(suffix):
            return TRACK_FORMATS[suffix]
    return TrackType.UNKNOWN, "unknown", None


def data_url(base_url: str, rel_path: str) -> str:
    return f"{base_url.rstrip('/')}/data/{rel_path}"


def build_track_config(rel_path: str, base_url: str, data_root: str | Path) -> TrackConfig:
    """Build the track config the front end passes to ``igv.loadTrack``.

    ``indexURL`` is only set when the companion index file exists next to
    the data file.
    """
    name = rel_path.rsplit("/", 1)[-1]
    track_type, fmt, index_suffix = track_format(name)

    index_url = None
    if index_suffix is not None:
        index_path = f"{rel_path}{index_suffix}"
        if (Path(data_root) / index_path).is_file():
            index_url = data_url(base_url, index_path)

    return TrackConfig(
        name=name,
        url=data_url(base_url, rel_path),
        type=track_type,
        format=fmt,
        index_url=index_url,
    )
