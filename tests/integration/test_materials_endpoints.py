from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


pytestmark = pytest.mark.integration


def _material(**overrides) -> SimpleNamespace:
    fields = {
        "id": 3,
        "title": "Daily Phrases",
        "type": "article",
        "category": "speaking",
        "source": None,
        "cover": None,
        "content": "Good morning!",
        "description": None,
        "created_at": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.mark.asyncio
async def test_update_without_id_is_400(client, db_session) -> None:
    response = await client.put("/api/material-resource/admin/update", json={"title": "New title"})

    assert response.status_code == 400
    assert response.json()["error"]["detail"] == "ID is required in the request body"
    db_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_of_missing_material_is_404(client, db_session) -> None:
    db_session.get = AsyncMock(return_value=None)

    response = await client.put("/api/material-resource/admin/update", json={"id": 12, "title": "New title"})

    assert response.status_code == 404
    assert response.json()["error"]["detail"] == "Material with ID 12 not found"


@pytest.mark.asyncio
async def test_update_changes_only_sent_fields(client, db_session) -> None:
    material = _material()
    db_session.get = AsyncMock(return_value=material)

    response = await client.put("/api/material-resource/admin/update", json={"id": 3, "title": "Evening Phrases"})

    assert response.status_code == 200
    assert material.title == "Evening Phrases"
    assert material.content == "Good morning!"
    db_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_removes_the_material(client, db_session) -> None:
    material = _material()
    db_session.get = AsyncMock(return_value=material)

    response = await client.delete("/api/material-resource/admin/delete/3")

    assert response.status_code == 200
    db_session.delete.assert_awaited_once_with(material)


@pytest.mark.asyncio
async def test_create_requires_a_title(client) -> None:
    response = await client.post("/api/material-resource/admin/create", json={"type": "article"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_passes_filters_to_the_query(client, db_session) -> None:
    result = MagicMock()
    result.scalars.return_value.all.return_value = [_material()]
    db_session.execute.return_value = result

    response = await client.get("/api/material-resource", params={"type": "article", "search": "Phrases"})

    assert response.status_code == 200
    assert [m["title"] for m in response.json()] == ["Daily Phrases"]
    statement = str(db_session.execute.await_args.args[0])
    assert "m_material_resource.type" in statement
    assert "LIKE" in statement
