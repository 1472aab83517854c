# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from httpx import AsyncClient

PASSWORD = "s3cretpass"

type Registrar = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def register(client: AsyncClient) -> Registrar:
    """
    Sign up a user through the API.

    The auth cookie set by the response is dropped so that each test picks
    its identity explicitly through ``headers``.
    """

    async def _register(name: str = "Jane Doe", email: str = "jane@example.com") -> dict[str, Any]:
        response = await client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": PASSWORD},
        )
        assert response.status_code == 201, response.text
        client.cookies.clear()
        body = response.json()
        return {
            "id": body["user"]["id"],
            "email": email,
            "access_token": body["accessToken"],
            "refresh_token": body["refreshToken"],
            "headers": {"Authorization": f"Bearer {body['accessToken']}"},
        }

    return _register


@pytest.fixture
async def alice(register: Registrar) -> dict[str, Any]:
    return await register(name="Alice", email="alice@example.com")


@pytest.fixture
async def bob(register: Registrar) -> dict[str, Any]:
    return await register(name="Bob", email="bob@example.com")


@pytest.fixture
def create_blog(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    async def _create_blog(author: dict[str, Any], **fields: Any) -> dict[str, Any]:
        payload = {"title": "Weekend in Lisbon", "content": "Trams and tarts"} | fields
        response = await client.post("/blog", json=payload, headers=author["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _create_blog
