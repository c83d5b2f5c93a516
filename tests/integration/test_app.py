import pytest


pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_health(client) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_security_headers_are_set(client) -> None:
    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_validation_errors_use_the_error_envelope(client) -> None:
    response = await client.get("/api/practice")

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["category"] == "VALIDATION_ERROR"
    assert any("course_id" in item["field"] for item in error["metadata"]["errors"])


@pytest.mark.asyncio
async def test_expired_token_is_403(client) -> None:
    from datetime import timedelta

    from lingopal.auth.security import create_access_token

    token = create_access_token(7, expires_delta=timedelta(minutes=-1))

    response = await client.get("/api/word", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json()["error"]["detail"] == "Token has expired."
