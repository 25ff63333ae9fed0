"""Integration tests for Posts API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.conftest import register_and_login


@pytest.fixture
async def ann(client: AsyncClient) -> dict[str, str]:
    return await register_and_login(client, email="a@x.com", name="Ann")


@pytest.fixture
async def bob(client: AsyncClient) -> dict[str, str]:
    return await register_and_login(client, email="b@x.com", name="Bob")


async def _create_post(client: AsyncClient, headers: dict[str, str], text: str = "hi") -> dict:
    response = await client.post("/api/posts", json={"text": text}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestCreateAndRead:
    @pytest.mark.asyncio
    async def test_create_snapshots_author(self, client: AsyncClient, ann: dict[str, str]):
        """Test POST /api/posts copies the author's name and avatar."""
        post = await _create_post(client, ann)

        assert post["text"] == "hi"
        assert post["name"] == "Ann"
        assert post["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert post["likes"] == []
        assert post["comments"] == []

    @pytest.mark.asyncio
    async def test_empty_text_is_400(self, client: AsyncClient, ann: dict[str, str]):
        """Test POST /api/posts with blank text."""
        response = await client.post("/api/posts", json={"text": "   "}, headers=ann)

        assert response.status_code == 400
        assert response.json()["errors"][0]["param"] == "text"

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient):
        """Test GET /api/posts/all without a token."""
        response = await client.get("/api/posts/all")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_lists_newest_first(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test GET /api/posts/all and GET /api/posts order newest first."""
        await _create_post(client, ann, "first")
        await _create_post(client, bob, "second")
        await _create_post(client, ann, "third")

        everything = await client.get("/api/posts/all", headers=bob)
        mine = await client.get("/api/posts", headers=ann)

        assert [p["text"] for p in everything.json()["data"]] == ["third", "second", "first"]
        assert [p["text"] for p in mine.json()["data"]] == ["third", "first"]

    @pytest.mark.asyncio
    async def test_get_by_id(self, client: AsyncClient, ann: dict[str, str]):
        """Test GET /api/posts/{post_id}."""
        post = await _create_post(client, ann)

        response = await client.get(f"/api/posts/{post['id']}", headers=ann)

        assert response.status_code == 200
        assert response.json()["data"]["id"] == post["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", ["not-a-uuid", str(uuid4())])
    async def test_unknown_or_malformed_id_is_400(
        self, client: AsyncClient, ann: dict[str, str], post_id: str
    ):
        """Test GET /api/posts/{post_id} with a bad id."""
        response = await client.get(f"/api/posts/{post_id}", headers=ann)

        assert response.status_code == 400
        assert response.json()["error_code"] == "POST_NOT_FOUND"


class TestLikes:
    @pytest.mark.asyncio
    async def test_like_twice_is_idempotent(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test PUT /api/posts/{post_id}/like twice."""
        post = await _create_post(client, ann)

        first = await client.put(f"/api/posts/{post['id']}/like", headers=bob)
        second = await client.put(f"/api/posts/{post['id']}/like", headers=bob)

        assert first.status_code == 200
        assert first.json()["message"] == "Post liked"
        assert second.status_code == 200
        assert second.json()["message"] == "Post has already been liked"
        assert len(second.json()["data"]["likes"]) == 1

    @pytest.mark.asyncio
    async def test_unlike_not_liked_returns_post_unchanged(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test PUT /api/posts/{post_id}/unlike without a like."""
        post = await _create_post(client, ann)

        response = await client.put(f"/api/posts/{post['id']}/unlike", headers=bob)

        assert response.status_code == 200
        assert response.json()["message"] == "Post has already been unliked"
        assert response.json()["data"]["likes"] == []

    @pytest.mark.asyncio
    async def test_like_then_unlike(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test PUT /api/posts/{post_id}/unlike after a like."""
        post = await _create_post(client, ann)
        await client.put(f"/api/posts/{post['id']}/like", headers=bob)

        response = await client.put(f"/api/posts/{post['id']}/unlike", headers=bob)

        assert response.json()["message"] == "Post unliked"
        assert response.json()["data"]["likes"] == []

    @pytest.mark.asyncio
    async def test_like_on_behalf_of_named_user(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test PUT /api/posts/{post_id}/like with an explicit user."""
        post = await _create_post(client, ann)
        target = str(uuid4())

        response = await client.put(
            f"/api/posts/{post['id']}/like", json={"user": target}, headers=bob
        )

        assert response.json()["data"]["likes"] == [target]

    @pytest.mark.asyncio
    async def test_like_unknown_post_is_400(self, client: AsyncClient, bob: dict[str, str]):
        """Test PUT /api/posts/{post_id}/like for a missing post."""
        response = await client.put(f"/api/posts/{uuid4()}/like", headers=bob)

        assert response.status_code == 400


class TestComments:
    @pytest.mark.asyncio
    async def test_comment_lifecycle(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test POST and DELETE /api/posts/{post_id}/comment."""
        post = await _create_post(client, ann)

        added = await client.post(
            f"/api/posts/{post['id']}/comment", json={"text": "nice"}, headers=bob
        )
        assert added.status_code == 200
        comment = added.json()["data"]["comments"][0]
        assert comment["name"] == "Bob"
        assert comment["text"] == "nice"

        removed = await client.delete(
            f"/api/posts/{post['id']}/comment/{comment['id']}", headers=bob
        )
        assert removed.status_code == 200
        assert removed.json()["data"]["comments"] == []

        again = await client.delete(
            f"/api/posts/{post['id']}/comment/{comment['id']}", headers=bob
        )
        assert again.status_code == 400
        assert again.json()["errors"][0]["msg"] == "Comment already deleted"

    @pytest.mark.asyncio
    async def test_comments_append_in_order(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test comments keep the order they were added in."""
        post = await _create_post(client, ann)

        for text, headers in [("one", bob), ("two", ann)]:
            await client.post(
                f"/api/posts/{post['id']}/comment", json={"text": text}, headers=headers
            )

        response = await client.get(f"/api/posts/{post['id']}", headers=ann)
        assert [c["text"] for c in response.json()["data"]["comments"]] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_empty_comment_is_400(self, client: AsyncClient, ann: dict[str, str]):
        """Test POST /api/posts/{post_id}/comment with empty text."""
        post = await _create_post(client, ann)

        response = await client.post(
            f"/api/posts/{post['id']}/comment", json={"text": ""}, headers=ann
        )

        assert response.status_code == 400


class TestDelete:
    @pytest.mark.asyncio
    async def test_author_deletes(self, client: AsyncClient, ann: dict[str, str]):
        """Test DELETE /api/posts/{post_id} by the author."""
        post = await _create_post(client, ann)

        response = await client.delete(f"/api/posts/{post['id']}", headers=ann)

        assert response.status_code == 200
        assert response.json() == {"message": "Post removed"}
        assert (await client.get(f"/api/posts/{post['id']}", headers=ann)).status_code == 400

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(
        self, client: AsyncClient, ann: dict[str, str], bob: dict[str, str]
    ):
        """Test DELETE /api/posts/{post_id} by another user."""
        post = await _create_post(client, ann)

        response = await client.delete(f"/api/posts/{post['id']}", headers=bob)

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"
        assert (await client.get(f"/api/posts/{post['id']}", headers=ann)).status_code == 200


class TestWalkthrough:
    @pytest.mark.asyncio
    async def test_register_login_post_and_forbidden_delete(self, client: AsyncClient):
        """Test register, login, post and a forbidden delete end to end."""
        body = {"name": "Ann", "email": "a@x.com", "password": "secret1"}
        assert (await client.post("/api/users", json=body)).status_code == 200
        assert (await client.post("/api/users", json=body)).status_code == 400

        login = await client.post("/api/auth", json={"email": "a@x.com", "password": "secret1"})
        headers = {"x-auth-token": login.json()["token"]}

        me = (await client.get("/api/auth", headers=headers)).json()["data"]
        assert me["name"] == "Ann"
        assert "password" not in me

        post = await _create_post(client, headers)
        assert post["name"] == "Ann"

        other = await register_and_login(client, email="c@x.com", name="Cat")
        response = await client.delete(f"/api/posts/{post['id']}", headers=other)
        assert response.status_code == 403
