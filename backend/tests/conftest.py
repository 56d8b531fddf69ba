"""Test fixtures — temporary data root and FastAPI test client."""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from genoserve.config import Settings
from genoserve.main import create_app
from genoserve.services.extension_filter import ExtensionFilter

BAM_BYTES = bytes(i % 256 for i in range(1000))


def _write(path: Path, data: bytes = b"") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Populated data directory plus a sibling sharing its name prefix."""
    root = tmp_path / "data"
    _write(root / "sample.bam", BAM_BYTES)
    _write(root / "sample.bam.bai", b"BAI\x01")
    _write(root / "notes.txt", b"not genomic")
    _write(root / "sub1" / "a.bam", b"A" * 10)
    _write(root / "sub1" / "a.bam.bai", b"I" * 4)
    _write(root / "sub1" / "notes.txt", b"skip me")
    _write(root / "genome" / "ref.fa", b">chr1\nACGT\n")
    _write(root / "genome" / "ref.fa.fai", b"chr1\t4\t6\t4\t5\n")
    _write(root / "genome" / "other.fasta", b">chr2\nTTTT\n")
    _write(root / "variants" / "calls.vcf.gz", b"\x1f\x8b" + b"\x00" * 30)
    _write(root / "variants" / "calls.vcf.gz.tbi", b"TBI\x01")
    _write(root / "empty.bed", b"")
    _write(tmp_path / "data-evil" / "secret.bam", b"secret")
    return root


@pytest.fixture
def bam_bytes() -> bytes:
    return BAM_BYTES


@pytest.fixture
def settings(data_root: Path, tmp_path: Path) -> Settings:
    return Settings(data_dir=str(data_root), static_dir=str(tmp_path / "no-frontend"))


@pytest.fixture
def extension_filter(settings: Settings) -> ExtensionFilter:
    return ExtensionFilter(settings.allowed_extensions)


@pytest_asyncio.fixture
async def client(settings: Settings):
    """Async test client bound to the temporary data root."""
    app = create_app(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
