import os
import uuid

# Configure before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["GENERATE_SCHEMAS"] = "false"

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.core import db as db_module
from app.main import app


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    await _init_test_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def account_factory(client):
    """
    Factory fixture: register + login through the API.
    Returns (auth headers, user id, email, password).
    """

    async def _create(name: str = "Traveler", password: str = "secret1") -> tuple[dict[str, str], str, str, str]:
        email = f"{uuid.uuid4().hex[:8]}@example.com"
        reg = await client.post(
            "/api/users/register",
            json={"name": name, "email": email, "password": password, "confirmpw": password},
        )
        assert reg.status_code == 200, reg.text
        login = await client.post("/api/users/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return {"Authorization": login.json()["token"]}, reg.json()["id"], email, password

    return _create


@pytest_asyncio.fixture
async def profile_factory(client):
    """
    Factory fixture: submit the required profile information for ``headers``.
    """

    async def _create(headers: dict[str, str], username: str | None = None, gender: str = "Other") -> dict:
        resp = await client.post(
            "/api/profile/required",
            headers=headers,
            json={
                "username": username or f"user{uuid.uuid4().hex[:6]}",
                "birth_date": "1990-05-17",
                "current_location": "Lisbon",
                "gender": gender,
            },
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _create


@pytest_asyncio.fixture
async def member_factory(account_factory, profile_factory):
    """Account with a profile. Returns (headers, user id, username)."""

    async def _create(name: str = "Traveler", username: str | None = None, gender: str = "Other"):
        headers, user_id, _, _ = await account_factory(name=name)
        profile = await profile_factory(headers, username=username, gender=gender)
        return headers, user_id, profile["username"]

    return _create
