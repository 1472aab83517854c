# tests/routes/test_blog_routes.py
"""Tests for the blog endpoints."""

from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Any
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlmodel.ext.asyncio.session import AsyncSession

from blog_backend.configs import settings

type BlogFactory = Callable[..., Awaitable[dict[str, Any]]]


class TestCreateBlog:
    async def test_returns_blog_with_author(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
    ) -> None:
        response = await client.post(
            "/blog",
            json={
                "title": "Weekend in Lisbon",
                "content": "Trams and tarts",
                "coverImage": "uploads/covers/lisbon.jpg",
            },
            headers=alice["headers"],
        )

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Weekend in Lisbon"
        assert body["coverImage"] == "uploads/covers/lisbon.jpg"
        assert body["user"] == {"id": alice["id"], "name": "Alice", "profileImage": None}
        assert body["likes"] == []
        assert body["commentCount"] == 0

    async def test_requires_authentication(self, client: AsyncClient, public_reads: None) -> None:
        response = await client.post("/blog", json={"title": "Title", "content": "Body"})

        assert response.status_code == 401

    @pytest.mark.parametrize("title", ["", "   "])
    async def test_empty_title(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        title: str,
    ) -> None:
        response = await client.post(
            "/blog",
            json={"title": title, "content": "Body"},
            headers=alice["headers"],
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "title"

        listing = await client.get("/blog", headers=alice["headers"])
        assert listing.json()["blogs"] == []

    async def test_auth_cookie_is_accepted(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
    ) -> None:
        response = await client.post(
            "/blog",
            json={"title": "Via cookie", "content": "Body"},
            headers={"Cookie": f"{settings.AUTH_COOKIE_NAME}={alice['access_token']}"},
        )

        assert response.status_code == 201
        assert response.json()["user"]["id"] == alice["id"]


class TestReadGate:
    async def test_anonymous_reads_blocked_when_private(
        self,
        client: AsyncClient,
        private_reads: None,
    ) -> None:
        response = await client.get("/blog")

        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}

    async def test_anonymous_reads_allowed_when_public(
        self,
        client: AsyncClient,
        public_reads: None,
        alice: dict[str, Any],
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(alice)

        listing = await client.get("/blog")
        single = await client.get(f"/blog/{blog['id']}")

        assert listing.status_code == 200
        assert single.status_code == 200

    async def test_invalid_token_rejected_even_when_public(
        self,
        client: AsyncClient,
        public_reads: None,
    ) -> None:
        response = await client.get("/blog", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401

    async def test_authenticated_reads_when_private(
        self,
        client: AsyncClient,
        private_reads: None,
        alice: dict[str, Any],
    ) -> None:
        response = await client.get("/blog", headers=alice["headers"])

        assert response.status_code == 200


class TestListBlogs:
    async def test_pagination(
        self,
        client: AsyncClient,
        public_reads: None,
        alice: dict[str, Any],
        create_blog: BlogFactory,
    ) -> None:
        for i in range(5):
            await create_blog(alice, title=f"Post {i}")

        response = await client.get("/blog", params={"page": 3, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 3
        assert body["limit"] == 2
        assert body["pageCount"] == 3
        assert len(body["blogs"]) == 1

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    async def test_bad_pagination(
        self,
        client: AsyncClient,
        public_reads: None,
        params: dict[str, int],
    ) -> None:
        response = await client.get("/blog", params=params)

        assert response.status_code == 422

    async def test_missing_blog(self, client: AsyncClient, public_reads: None) -> None:
        blog_id = uuid4()

        response = await client.get(f"/blog/{blog_id}")

        assert response.status_code == 404
        assert response.json() == {"detail": f"Blog with ID {blog_id} not found"}

    async def test_malformed_id(self, client: AsyncClient, public_reads: None) -> None:
        response = await client.get("/blog/not-a-uuid")

        assert response.status_code == 422


class TestUpdateBlog:
    async def test_owner_can_update(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        create_blog: BlogFactory,
        file_releaser: AsyncMock,
    ) -> None:
        blog = await create_blog(alice, coverImage="uploads/covers/old.jpg")

        response = await client.patch(
            f"/blog/{blog['id']}",
            json={"title": "New title", "coverImage": "uploads/covers/new.jpg"},
            headers=alice["headers"],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "New title"
        assert body["content"] == "Trams and tarts"
        assert body["updatedAt"] is not None
        file_releaser.release.assert_awaited_once_with("uploads/covers/old.jpg")

    async def test_other_user_is_forbidden(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(alice)

        response = await client.patch(
            f"/blog/{blog['id']}",
            json={"title": "Hijacked"},
            headers=bob["headers"],
        )

        assert response.status_code == 403
        unchanged = await client.get(f"/blog/{blog['id']}", headers=alice["headers"])
        assert unchanged.json()["title"] == "Weekend in Lisbon"

    async def test_null_title(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(alice)

        response = await client.patch(
            f"/blog/{blog['id']}",
            json={"title": None},
            headers=alice["headers"],
        )

        assert response.status_code == 422

    async def test_missing_blog(self, client: AsyncClient, alice: dict[str, Any]) -> None:
        response = await client.patch(
            f"/blog/{uuid4()}",
            json={"title": "Anything"},
            headers=alice["headers"],
        )

        assert response.status_code == 404


class TestDeleteBlog:
    async def test_owner_can_delete(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        create_blog: BlogFactory,
        file_releaser: AsyncMock,
    ) -> None:
        blog = await create_blog(alice, coverImage="uploads/covers/lisbon.jpg")

        response = await client.delete(f"/blog/{blog['id']}", headers=alice["headers"])

        assert response.status_code == 204
        assert response.content == b""
        file_releaser.release.assert_awaited_once_with("uploads/covers/lisbon.jpg")
        gone = await client.get(f"/blog/{blog['id']}", headers=alice["headers"])
        assert gone.status_code == 404

    async def test_failed_commit_keeps_cover(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        create_blog: BlogFactory,
        file_releaser: AsyncMock,
    ) -> None:
        blog = await create_blog(alice, coverImage="uploads/covers/lisbon.jpg")
        failing_commit = AsyncMock(
            side_effect=OperationalError("COMMIT", None, Exception("disk I/O error")),
        )

        # The session closes after the response starts, so the error may surface here
        with patch.object(AsyncSession, "commit", failing_commit), suppress(OperationalError):
            await client.delete(f"/blog/{blog['id']}", headers=alice["headers"])

        failing_commit.assert_awaited_once()
        file_releaser.release.assert_not_awaited()
        kept = await client.get(f"/blog/{blog['id']}", headers=alice["headers"])
        assert kept.status_code == 200
        assert kept.json()["coverImage"] == "uploads/covers/lisbon.jpg"

    async def test_other_user_is_forbidden(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
        create_blog: BlogFactory,
        file_releaser: AsyncMock,
    ) -> None:
        blog = await create_blog(alice, coverImage="uploads/covers/lisbon.jpg")

        response = await client.delete(f"/blog/{blog['id']}", headers=bob["headers"])

        assert response.status_code == 403
        file_releaser.release.assert_not_awaited()

    async def test_missing_blog(self, client: AsyncClient, alice: dict[str, Any]) -> None:
        response = await client.delete(f"/blog/{uuid4()}", headers=alice["headers"])

        assert response.status_code == 404


class TestToggleLike:
    async def test_like_then_unlike(
        self,
        client: AsyncClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(alice)
        url = f"/blog/{blog['id']}/like"

        liked = await client.put(url, headers=bob["headers"])
        assert liked.status_code == 200
        assert liked.json() == {"blogId": blog["id"], "liked": True}

        detail = await client.get(f"/blog/{blog['id']}", headers=bob["headers"])
        assert detail.json()["likes"] == [{"userId": bob["id"]}]

        unliked = await client.put(url, headers=bob["headers"])
        assert unliked.json() == {"blogId": blog["id"], "liked": False}

        detail = await client.get(f"/blog/{blog['id']}", headers=bob["headers"])
        assert detail.json()["likes"] == []

    async def test_missing_blog(self, client: AsyncClient, alice: dict[str, Any]) -> None:
        response = await client.put(f"/blog/{uuid4()}/like", headers=alice["headers"])

        assert response.status_code == 404

    async def test_requires_authentication(
        self,
        client: AsyncClient,
        public_reads: None,
        alice: dict[str, Any],
        create_blog: BlogFactory,
    ) -> None:
        blog = await create_blog(alice)

        response = await client.put(f"/blog/{blog['id']}/like")

        assert response.status_code == 401
