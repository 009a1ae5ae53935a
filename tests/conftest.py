import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI

from shortlinks.config import Settings
from shortlinks.main import create_app

ADMIN_TOKEN = "test-admin-token"

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'links.db'}",
        ADMIN_TOKEN=ADMIN_TOKEN,
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )

@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    app = create_app(settings)
    # ASGITransport does not send lifespan events, so run startup/shutdown here
    async with app.router.lifespan_context(app):
        yield app

@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with ASGITransport(app=app) as transport:
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c

@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}

@pytest.fixture
def create_link(client: AsyncClient):
    async def _create(url: str = "https://example.com/page", note=None) -> str:
        payload = {"url": url}
        if note is not None:
            payload["note"] = note
        response = await client.post("/api/create", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["code"]
    return _create

@pytest.fixture
def find_link(client: AsyncClient, admin_headers):
    async def _find(code: str) -> dict:
        response = await client.get("/api/admin/links", params={"pageSize": 100}, headers=admin_headers)
        assert response.status_code == 200
        matches = [row for row in response.json()["data"] if row["code"] == code]
        assert matches, f"{code} not listed"
        return matches[0]
    return _find
