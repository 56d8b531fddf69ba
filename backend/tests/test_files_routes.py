"""Tests for listing routes — /api/files, /api/browse, /api/genomes, /api/tracks."""

import pytest
from httpx import ASGITransport, AsyncClient

from genoserve.config import Settings
from genoserve.main import create_app


@pytest.mark.asyncio
async def test_list_files(client: AsyncClient, data_root):
    resp = await client.get("/api/files")
    assert resp.status_code == 200
    data = resp.json()
    assert data["dataDir"] == str(data_root.resolve())

    by_path = {f["path"]: f for f in data["files"]}
    assert by_path["sub1"] == {
        "name": "sub1",
        "path": "sub1",
        "type": "directory",
        "size": 0,
        "modified": None,
    }
    assert by_path["sample.bam"]["size"] == 1000
    assert by_path["sample.bam"]["modified"] is not None
    assert "notes.txt" not in by_path


@pytest.mark.asyncio
async def test_browse_subdirectory(client: AsyncClient):
    resp = await client.get("/api/browse", params={"path": "sub1"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["currentPath"] == "sub1"
    assert [i["name"] for i in data["items"]] == ["a.bam", "a.bam.bai"]
    assert all(i["allowed"] for i in data["items"])


@pytest.mark.asyncio
async def test_browse_root_by_default(client: AsyncClient):
    resp = await client.get("/api/browse")
    assert resp.status_code == 200
    names = {i["name"] for i in resp.json()["items"]}
    assert {"sub1", "genome", "sample.bam"} <= names


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, status",
    [
        ("missing", 404),
        ("sample.bam", 400),
        ("../data-evil", 403),
        ("../../../etc", 403),
    ],
)
async def test_browse_errors(client: AsyncClient, path, status):
    resp = await client.get("/api/browse", params={"path": path})
    assert resp.status_code == status
    assert "detail" in resp.json()


@pytest.mark.asyncio
async def test_genomes(client: AsyncClient):
    resp = await client.get("/api/genomes")
    assert resp.status_code == 200
    genomes = {g["path"]: g for g in resp.json()["genomes"]}
    assert genomes["genome/ref.fa"]["displayName"] == "ref"
    assert genomes["genome/ref.fa"]["hasIndex"] is True
    assert genomes["genome/other.fasta"]["hasIndex"] is False


@pytest.mark.asyncio
async def test_track_config(client: AsyncClient):
    resp = await client.get("/api/tracks", params={"path": "sample.bam"})
    assert resp.status_code == 200
    assert resp.json() == {
        "name": "sample.bam",
        "url": "http://test/data/sample.bam",
        "type": "alignment",
        "format": "bam",
        "indexURL": "http://test/data/sample.bam.bai",
    }


@pytest.mark.asyncio
async def test_track_config_without_index(client: AsyncClient):
    resp = await client.get("/api/tracks", params={"path": "genome/other.fasta"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["type"] == "unknown"
    assert "indexURL" not in data


@pytest.mark.asyncio
@pytest.mark.parametrize("path, status", [("missing.bam", 404), ("notes.txt", 403), ("../data-evil/secret.bam", 403)])
async def test_track_config_errors(client: AsyncClient, path, status):
    resp = await client.get("/api/tracks", params={"path": path})
    assert resp.status_code == status


@pytest.mark.asyncio
async def test_listing_disabled(data_root, tmp_path):
    settings = Settings(
        data_dir=str(data_root),
        static_dir=str(tmp_path / "no-frontend"),
        allow_directory_listing=False,
    )
    transport = ASGITransport(app=create_app(settings))
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        for url in ("/api/files", "/api/browse", "/api/genomes"):
            resp = await c.get(url)
            assert resp.status_code == 403
        # Data files stay reachable
        resp = await c.get("/data/sample.bam")
        assert resp.status_code == 200
