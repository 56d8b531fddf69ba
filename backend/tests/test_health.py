"""Test health check endpoint."""

import pytest
from httpx import AsyncClient

from genoserve import __version__


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient, data_root):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "dataDir": str(data_root.resolve()),
        "version": __version__,
    }
