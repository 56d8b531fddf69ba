"""Path containment helpers for user-supplied relative paths."""

from pathlib import Path


def resolve_within(root: str | Path, sub_path: str) -> Path:
    """Resolve *sub_path* under *root* and verify it stays inside it.

    A leading ``/`` is dropped, so absolute-looking paths map under the root.
    Raises ``ValueError`` when the resolved path escapes the root, whether by
    ``..`` segments or a symlink pointing outside.
    """
    base = Path(root).resolve()
    target = (base / sub_path.lstrip("/")).resolve()
    if target == base or base in target.parents:
        return target
    raise ValueError(f"{sub_path!r} resolves outside {base}")


def relative_posix(path: Path, root: Path) -> str:
    """Return *path* relative to *root* with forward slashes."""
    return path.relative_to(root).as_posix()
