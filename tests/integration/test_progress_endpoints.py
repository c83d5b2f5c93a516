"""Progress upsert endpoints driven through the HTTP app with an in-memory store."""

import pytest

from lingopal.progress import COURSE_PROGRESS, PRACTICE_PROGRESS


pytestmark = pytest.mark.integration


def _practice_body(**overrides) -> dict:
    body = {
        "user_id": 7,
        "practice_id": 3,
        "progress_poin": 10,
        "is_active": True,
        "is_passed": False,
    }
    body.update(overrides)
    return body


def _course_body(**overrides) -> dict:
    body = {
        "user_id": 7,
        "course_id": 2,
        "progress_poin": 30,
        "is_active": True,
        "is_course_completed": False,
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_practice_progress_requires_a_token(client) -> None:
    response = await client.post("/api/practice/progress", json=_practice_body())

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_MISSING"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_practice_progress_rejects_a_bad_token(client) -> None:
    response = await client.post(
        "/api/practice/progress",
        json=_practice_body(),
        headers={"Authorization": "Bearer not-a-real-token"},
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_practice_progress_for_another_user_is_forbidden(client_factory, record_store) -> None:
    client = await client_factory(user_id=8)

    response = await client.post("/api/practice/progress", json=_practice_body(user_id=7))

    assert response.status_code == 403
    assert response.json()["error"]["category"] == "AUTHORIZATION_ERROR"
    assert record_store.rows(PRACTICE_PROGRESS.table) == []


@pytest.mark.asyncio
async def test_create_then_update_practice_progress(client_factory, record_store) -> None:
    client = await client_factory(user_id=7)

    created = await client.post("/api/practice/progress", json=_practice_body())
    assert created.status_code == 200
    record = created.json()
    assert record["progress_practice_id"] > 0
    assert record["is_passed"] is False

    updated = await client.post(
        "/api/practice/progress",
        json=_practice_body(progress_practice_id=record["progress_practice_id"], progress_poin=40, is_passed=True),
    )
    assert updated.status_code == 200
    assert updated.json()["progress_poin"] == 40
    assert updated.json()["is_passed"] is True

    assert len(record_store.rows(PRACTICE_PROGRESS.table)) == 1
    assert record_store.procedure_calls == [
        ("recompute_user_total", {"user_id": 7}),
        ("recompute_user_total", {"user_id": 7}),
    ]


@pytest.mark.asyncio
async def test_update_of_unknown_practice_progress_is_404(client_factory, record_store) -> None:
    client = await client_factory(user_id=7)

    response = await client.post("/api/practice/progress", json=_practice_body(progress_practice_id=999))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
    assert record_store.procedure_calls == []


@pytest.mark.asyncio
async def test_duplicate_practice_progress_create_is_409(client_factory) -> None:
    client = await client_factory(user_id=7)

    first = await client.post("/api/practice/progress", json=_practice_body())
    second = await client.post("/api/practice/progress", json=_practice_body(progress_poin=55))

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "ALREADY_EXISTS"
    assert second.json()["error"]["detail"] == "Practice progress already exists"


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["progress_practice_id", "user_id", "practice_id"])
async def test_zero_identifiers_fail_validation(client_factory, record_store, field) -> None:
    client = await client_factory(user_id=7)

    response = await client.post("/api/practice/progress", json=_practice_body(**{field: 0}))

    assert response.status_code == 422
    assert response.json()["error"]["category"] == "VALIDATION_ERROR"
    assert record_store.rows(PRACTICE_PROGRESS.table) == []


@pytest.mark.asyncio
async def test_store_outage_is_503(client_factory, record_store) -> None:
    record_store.fail_on.add("insert")
    client = await client_factory(user_id=7)

    response = await client.post("/api/practice/progress", json=_practice_body())

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "DB_CONNECTION_FAILED"


@pytest.mark.asyncio
async def test_recompute_failure_still_returns_written_record(client_factory, record_store) -> None:
    record_store.procedure_error = RuntimeError("recompute failed")
    client = await client_factory(user_id=7)

    response = await client.post("/api/practice/progress", json=_practice_body(progress_poin=15))

    assert response.status_code == 200
    assert response.json()["progress_poin"] == 15


@pytest.mark.asyncio
async def test_course_progress_create_uses_course_columns(client_factory, record_store) -> None:
    client = await client_factory(user_id=7)

    response = await client.post("/api/course/progress", json=_course_body(is_course_completed=True))

    assert response.status_code == 200
    body = response.json()
    assert body["course_id"] == 2
    assert body["is_course_completed"] is True
    [row] = record_store.rows(COURSE_PROGRESS.table)
    assert row["progress_course_id"] == body["progress_course_id"]


@pytest.mark.asyncio
async def test_course_progress_update_of_another_users_record_is_404(client_factory, record_store) -> None:
    record_store.seed(
        COURSE_PROGRESS.table,
        {
            "progress_course_id": 5,
            "user_id": 9,
            "course_id": 2,
            "progress_poin": 1,
            "is_active": True,
            "is_course_completed": False,
            "updated_at": None,
        },
    )
    client = await client_factory(user_id=7)

    response = await client.post("/api/course/progress", json=_course_body(progress_course_id=5))

    assert response.status_code == 404
    assert record_store.rows(COURSE_PROGRESS.table)[0]["progress_poin"] == 1


@pytest.mark.asyncio
async def test_recompute_outage_still_reports_the_committed_write(client_factory, record_store) -> None:
    record_store.fail_on.add("call_procedure")
    client = await client_factory(user_id=7)

    created = await client.post("/api/practice/progress", json=_practice_body())
    retried = await client.post(
        "/api/practice/progress",
        json=_practice_body(progress_practice_id=created.json()["progress_practice_id"], progress_poin=25),
    )

    assert created.status_code == 200
    assert retried.status_code == 200
    assert retried.json()["progress_poin"] == 25
    assert len(record_store.rows(PRACTICE_PROGRESS.table)) == 1
