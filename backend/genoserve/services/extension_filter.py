"""Allow-list of file suffixes that may be listed and served."""

from __future__ import annotations

from typing import Iterable


class ExtensionFilter:
    """Case-insensitive suffix allow-list.

    Suffixes are matched as a whole against the end of the lowercased name,
    longest first, so ``sample.vcf.gz`` resolves to ``.vcf.gz`` and never to
    a bare ``.gz``.
    """

    def __init__(self, suffixes: Iterable[str]):
        normalized = []
        for suffix in suffixes:
            suffix = suffix.strip().lower()
            if suffix and not suffix.startswith("."):
                suffix = "." + suffix
            if suffix and suffix not in normalized:
                normalized.append(suffix)
        self._suffixes = tuple(sorted(normalized, key=len, reverse=True))

    @property
    def suffixes(self) -> tuple[str, ...]:
        return self._suffixes

    def match(self, filename: str) -> str | None:
        """Return the longest allow-listed suffix of *filename*, or None."""
        name = filename.rsplit("/", 1)[-1].lower()
        for suffix in self._suffixes:
            # A name that is only the suffix (".bam") has no extension.
            if len(name) > len(suffix) and name.endswith(suffix):
                return suffix
        return None

    def is_allowed(self, filename: str) -> bool:
        return self.match(filename) is not None
