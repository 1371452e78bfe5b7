import time

import pytest

from app.main import app
from app.models.user import User


pytestmark = pytest.mark.asyncio


async def test_private_route_requires_token(client):
    resp = await client.get("/api/profile")
    assert resp.status_code == 401
    assert resp.json() == {"unauthorized": "AUTH_REQUIRED"}


async def test_only_bearer_scheme_is_accepted(client, account_factory):
    headers, _, _, _ = await account_factory()
    raw_token = headers["Authorization"].split(" ", 1)[1]

    for value in (raw_token, f"Token {raw_token}", "Bearer "):
        resp = await client.get("/api/post/all", headers={"Authorization": value})
        assert resp.status_code == 401
        assert resp.json() == {"unauthorized": "AUTH_REQUIRED"}


async def test_invalid_token_is_rejected(client):
    resp = await client.get("/api/post/all", headers={"Authorization": "Bearer abc.def.ghi"})
    assert resp.status_code == 401
    assert resp.json() == {"unauthorized": "AUTH_INVALID_TOKEN"}


async def test_expired_token_is_rejected(client, account_factory):
    _, user_id, _, _ = await account_factory()
    user = await User.get(id=user_id)
    expired = app.state.tokens.issue(user, now=int(time.time()) - 7300)

    resp = await client.get("/api/post/all", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json() == {"unauthorized": "AUTH_INVALID_TOKEN"}


async def test_token_for_deleted_user_is_rejected(client, account_factory):
    headers, _, _, _ = await account_factory()

    deleted = await client.delete("/api/profile", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True}

    resp = await client.get("/api/post/all", headers=headers)
    assert resp.status_code == 401
    assert resp.json() == {"unauthorized": "AUTH_USER_NOT_FOUND"}


async def test_valid_token_reaches_handler(client, account_factory):
    headers, _, _, _ = await account_factory()
    resp = await client.get("/api/post/all", headers=headers)
    # Authenticated; the handler itself reports there is nothing yet
    assert resp.status_code == 404
    assert resp.json() == {"no_posts": "There are no posts."}
