import uuid
from collections.abc import Generator

from httpx import AsyncClient
from pytest import fixture

from blog_backend.managers.rate_limiter import limiter


@fixture
def rate_limited() -> Generator[None]:
    limiter.enabled = True
    limiter.reset()
    yield
    limiter.enabled = False


async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "1.0.0"
    assert data["environment"] == "testing"
    assert "timestamp" in data


async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "max-age" in response.headers["Strict-Transport-Security"]


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert uuid.UUID(response.headers["X-Request-ID"])


async def test_unknown_route(client: AsyncClient) -> None:
    response = await client.get("/nope")

    assert response.status_code == 404


async def test_forgot_password_rate_limit(client: AsyncClient, rate_limited: None) -> None:
    headers = {"X-API-Key": str(uuid.uuid4())}
    payload = {"email": "nobody@example.com"}

    # 3/hour allowed
    for _ in range(3):
        response = await client.post("/auth/forgot-password", json=payload, headers=headers)
        assert response.status_code == 200

    response = await client.post("/auth/forgot-password", json=payload, headers=headers)
    assert response.status_code == 429
    assert response.json()["detail"] == "Rate limit exceeded"


async def test_health_is_not_rate_limited(client: AsyncClient, rate_limited: None) -> None:
    headers = {"X-API-Key": str(uuid.uuid4())}

    for _ in range(20):
        response = await client.get("/health", headers=headers)
        assert response.status_code == 200
